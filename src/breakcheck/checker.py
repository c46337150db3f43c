import logging
import socket
import urllib.request
from http import HTTPStatus
from http.client import HTTPException, HTTPResponse, IncompleteRead
from time import monotonic
from urllib.error import HTTPError
from breakcheck.config import TIMEOUT, USER_AGENT
from breakcheck.errors import NetworkError, RemoteError, ReadError, EmptyDateError
from breakcheck.feed import extract_last_build_date

logger = logging.getLogger()

CHUNK_SIZE = 8192

class CheckResult:
    def __init__(self, changed: bool = False, header_last_modified: str = '', feed_last_modified: str = '') -> None:
        self.changed = changed
        self.header_last_modified = header_last_modified
        self.feed_last_modified = feed_last_modified
    def __repr__(self) -> str:
        return (f"CheckResult(changed={self.changed!r}, header_last_modified={self.header_last_modified!r}, "
                f"feed_last_modified={self.feed_last_modified!r})")

def build_request(url: str, header_last_modified: str, user_agent: str = USER_AGENT) -> urllib.request.Request:
    headers = {
        'User-Agent': user_agent,
        'Accept': 'application/rss+xml',
        # servers ignore an empty conditional header
        'If-Modified-Since': header_last_modified,
    }
    try:
        return urllib.request.Request(url, data=None, headers=headers, method='GET')
    except ValueError as e:
        raise NetworkError(f'error creating request for {url!r}') from e

def _set_read_timeout(resp: HTTPResponse, timeout: float) -> None:
    # the socket is only reachable through the response's buffered reader
    sock = getattr(getattr(resp.fp, 'raw', None), '_sock', None)
    if sock is not None:
        sock.settimeout(timeout)

def read_body(resp: HTTPResponse, deadline: float) -> bytes:
    ''' reads the whole body, raises NetworkError once monotonic() passes the deadline '''
    chunks = list()
    while True:
        remaining = deadline - monotonic()
        if remaining <= 0:
            raise NetworkError('timed out reading news feed')
        _set_read_timeout(resp, remaining)
        try:
            chunk = resp.read1(CHUNK_SIZE)
        except socket.timeout as e:
            raise NetworkError('timed out reading news feed') from e
        except (OSError, HTTPException) as e:
            raise ReadError() from e
        if not chunk:
            break
        chunks.append(chunk)
    data = b''.join(chunks)
    if resp.length:
        raise ReadError() from IncompleteRead(data, resp.length)
    return data

def check(url: str, header_last_modified: str, feed_last_build_date: str,
          timeout: float = TIMEOUT, user_agent: str = USER_AGENT) -> CheckResult:
    ''' timeout bounds the whole exchange, from connect to the last byte of the body '''
    req = build_request(url, header_last_modified, user_agent)
    deadline = monotonic() + timeout
    logger.debug(f'requesting {url} {header_last_modified=} {timeout=}')
    try:
        resp = urllib.request.urlopen(req, timeout=timeout)
    except HTTPError as e:
        try:
            if e.code == HTTPStatus.NOT_MODIFIED:
                new_header = e.headers.get('Last-Modified') or header_last_modified
                logger.debug(f'feed has not been modified {header_last_modified=} {new_header=}')
                return CheckResult(False, new_header, '')
            raise RemoteError(e.code, e.reason) from e
        finally:
            e.close()
    except (OSError, HTTPException, ValueError) as e:
        raise NetworkError(f'error retrieving {url}') from e

    with resp:
        logger.debug(f'response status {resp.status}')
        if resp.status != HTTPStatus.OK:
            raise RemoteError(resp.status, resp.reason)
        new_header = resp.headers.get('Last-Modified') or ''
        news_data = read_body(resp, deadline)

    last_build_date = extract_last_build_date(news_data)
    if not last_build_date:
        raise EmptyDateError()
    if last_build_date == feed_last_build_date:
        logger.debug(f'feed content is unchanged {last_build_date=}')
        return CheckResult(False, new_header, last_build_date)
    logger.debug(f'feed has changed {feed_last_build_date=} {last_build_date=}')
    return CheckResult(True, new_header, last_build_date)
