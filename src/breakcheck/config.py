import json
import logging
from math import isfinite
from pathlib import Path
from typing import Union
from breakcheck.errors import ConfigError

logger = logging.getLogger()

CONFIG_DIR = Path('/etc/breakcheck')
CONFIG_FILE = 'config.json'
ARCH_NEWS_URL = 'https://archlinux.org/feeds/news/'
STATE_FILE = Path('/var/lib/breakcheck.json')
TIMEOUT = 30
USER_AGENT = 'breakcheck'

class Config:
    def __init__(self, url: str = ARCH_NEWS_URL, state_file: Union[str, Path] = STATE_FILE,
                 timeout: float = TIMEOUT, user_agent: str = USER_AGENT) -> None:
        for (k, v) in (('url', url), ('state_file', state_file), ('user_agent', user_agent)):
            if not isinstance(v, (str, Path)) or not str(v):
                raise ConfigError(f'{k} must be a non-empty string, got {v!r}')
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError(f'timeout must be a number, got {timeout!r}')
        if not isfinite(timeout) or timeout <= 0:
            raise ConfigError(f'timeout must be a positive finite number, got {timeout!r}')
        self.url = str(url)
        self.state_file = Path(state_file)
        self.timeout = timeout
        self.user_agent = str(user_agent)

    def replace(self, **overrides) -> 'Config':
        ''' returns a copy with every override that is not None applied '''
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return Config(**values)

    def to_dict(self) -> dict:
        return {'url': self.url, 'state_file': self.state_file, 'timeout': self.timeout, 'user_agent': self.user_agent}

    def __repr__(self) -> str:
        return f"Config({', '.join(f'{k}={v!r}' for k, v in self.to_dict().items())})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Config):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @classmethod
    def from_file(cls, path: Union[str, Path] = CONFIG_DIR / CONFIG_FILE) -> 'Config':
        ''' a missing config file means defaults '''
        path = Path(path)
        if not path.exists():
            logger.debug(f'config file {path} does not exist, using defaults')
            return cls()
        try:
            _config = json.loads(path.read_text())
        except (OSError, ValueError, RecursionError) as e:
            raise ConfigError(f'unable to load config file {path}') from e
        if not isinstance(_config, dict):
            raise ConfigError(f'config file {path} must contain a json object')
        logger.debug(f'loaded config file {path}')
        return cls(
            url=_config.get('url', ARCH_NEWS_URL),
            state_file=_config.get('state_file', STATE_FILE),
            timeout=_config.get('timeout', TIMEOUT),
            user_agent=_config.get('user_agent', USER_AGENT),
        )
