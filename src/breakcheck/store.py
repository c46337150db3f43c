import json
import logging
from os import open as os_open, chmod
from pathlib import Path
from typing import Union
from breakcheck.errors import StorageError

logger = logging.getLogger()

WRITE_FILE_MODE = 0o600

class PersistedState:
    def __init__(self, header_last_modified: str = '', feed_last_build_date: str = '') -> None:
        self.header_last_modified = header_last_modified
        self.feed_last_build_date = feed_last_build_date
    def to_dict(self) -> dict:
        return {'lastModified': self.header_last_modified, 'feedLastBuildDate': self.feed_last_build_date}
    @classmethod
    def from_dict(cls, data: dict) -> 'PersistedState':
        if not isinstance(data, dict):
            raise TypeError(f'expected a json object, got {type(data).__name__}')
        values = list()
        for key in ('lastModified', 'feedLastBuildDate'):
            value = data.get(key, '')
            if not isinstance(value, str):
                raise TypeError(f'{key} must be a string, got {type(value).__name__}')
            values.append(value)
        return cls(*values)
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistedState):
            return NotImplemented
        return self.to_dict() == other.to_dict()
    def __repr__(self) -> str:
        return f"PersistedState(header_last_modified={self.header_last_modified!r}, feed_last_build_date={self.feed_last_build_date!r})"

def load(path: Union[str, Path]) -> PersistedState:
    path = Path(path)
    logger.debug(f'loading state from {path}')
    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        logger.debug('state file does not exist: first run')
        return PersistedState()
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f'could not read state file {path}') from e
    try:
        return PersistedState.from_dict(json.loads(text))
    except (ValueError, TypeError, RecursionError) as e:
        raise StorageError(f'could not parse state file {path}') from e

def save(state: PersistedState, path: Union[str, Path]) -> None:
    path = Path(path)
    logger.debug(f'saving state {state} to {path}')
    try:
        data = json.dumps(state.to_dict())
    except (TypeError, ValueError) as e:
        raise StorageError('could not serialize state') from e
    try:
        with open(path, 'w', encoding='utf-8', opener=lambda p, f: os_open(p, f, WRITE_FILE_MODE)) as fp:
            fp.write(data)
        # the creation mode does not apply to a file that already exists
        chmod(path, WRITE_FILE_MODE)
    except OSError as e:
        raise StorageError(f'could not save state file {path}') from e
