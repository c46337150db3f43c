#!/usr/bin/python

import logging
from enum import IntEnum
from sys import exit
from breakcheck import store
from breakcheck.checker import check
from breakcheck.config import Config, CONFIG_DIR, CONFIG_FILE
from breakcheck.errors import BreakcheckError

logger = logging.getLogger()

NEWS_NOTICE = ("News has been updated.\n"
               "Make sure you have read the news items and restart the upgrade to complete.\n")

# exit code for exceptions outside the BreakcheckError family
INTERNAL_ERROR = 107

class Outcome(IntEnum):
    NO_NEWS = 0
    NEWS = 1

class Breakcheck:
    def __init__(self, config: Config) -> None:
        self.config = config

    def run(self) -> Outcome:
        ''' raises BreakcheckError on failure, nothing is saved in that case '''
        state_file = self.config.state_file
        state = store.load(state_file)
        logger.debug(f'loaded {state}')
        result = check(self.config.url, state.header_last_modified, state.feed_last_build_date,
                       timeout=self.config.timeout, user_agent=self.config.user_agent)
        logger.debug(f'checked {result}')

        if not result.changed:
            _header = result.header_last_modified
            if _header and _header != state.header_last_modified:
                logger.debug(f'refreshing lastModified {state.header_last_modified!r} -> {_header!r}')
                state.header_last_modified = _header
                store.save(state, state_file)
            logger.info('no news')
            return Outcome.NO_NEWS

        state.header_last_modified = result.header_last_modified
        state.feed_last_build_date = result.feed_last_modified
        store.save(state, state_file)
        logger.info(f'news feed updated at {result.feed_last_modified}')
        print(NEWS_NOTICE)
        return Outcome.NEWS

def main() -> None:
    import argparse
    parser = argparse.ArgumentParser(description='Check the Arch Linux news feed before upgrading. '
                                     'Exits 0 when there is no news, 1 when there is unread news.')
    parser.add_argument('-c', '--config', default=CONFIG_DIR / CONFIG_FILE, help='path to the config file')
    parser.add_argument('-s', '--state-file', help='where to keep the last seen dates')
    parser.add_argument('-u', '--url', help='news feed url')
    parser.add_argument('-t', '--timeout', type=float, help='request timeout in seconds')
    parser.add_argument('-d', '--debug', action='store_true', help='enable debug mode')
    args = parser.parse_args()
    _log_format = '%(asctime)s - %(module)s - %(funcName)s - %(levelname)s - %(message)s' if args.debug else '%(levelname)s - %(message)s'
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format=_log_format)

    try:
        config = Config.from_file(args.config).replace(url=args.url, state_file=args.state_file, timeout=args.timeout)
        outcome = Breakcheck(config).run()
    except BreakcheckError as e:
        logger.error(f'{e}')
        exit(e.exit_code)
    except Exception:
        logger.exception(f'internal error (code {INTERNAL_ERROR})')
        exit(INTERNAL_ERROR)
    exit(int(outcome))

if __name__ == '__main__':
    main()
