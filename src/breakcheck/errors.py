class BreakcheckError(Exception):
    exit_code = 100
    message = 'breakcheck failed'
    def __init__(self, message: str = None) -> None:
        super().__init__(message or self.message)
    def __str__(self) -> str:
        ret = f"{self.args[0]} (code {self.exit_code})"
        if self.__cause__ is not None:
            ret += f": {self.__cause__}"
        return ret

class StorageError(BreakcheckError):
    exit_code = 100
    message = 'state file error'

class NetworkError(BreakcheckError):
    exit_code = 101
    message = 'retrieving news feed failed'

class RemoteError(BreakcheckError):
    exit_code = 102
    message = 'news feed returned an error status'
    def __init__(self, status: int, reason: str = '') -> None:
        self.status = status
        self.reason = reason
        super().__init__(f"{self.message}: {status} {reason}".rstrip())

class ReadError(BreakcheckError):
    exit_code = 103
    message = 'reading news feed failed'

class DecodeError(BreakcheckError):
    exit_code = 104
    message = 'decoding news feed failed'

class EmptyDateError(BreakcheckError):
    exit_code = 105
    message = 'news feed has no lastBuildDate'

class ConfigError(BreakcheckError):
    exit_code = 106
    message = 'invalid configuration'
