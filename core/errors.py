import subprocess


class BruvError(Exception):
    """Base class for every failure that aborts a comparison run."""


class ConfigError(BruvError):
    pass


class CacheInitError(BruvError):
    pass


class RemoteError(BruvError):
    pass


class GitCommandError(BruvError):
    pass


class DivergenceParseError(BruvError, ValueError):
    def __init__(self, message: str, raw_output: str):
        super().__init__(message)
        self.raw_output = raw_output


class ReportError(BruvError):
    pass


def format_error(error: BaseException) -> str:
    """Render an exception and its chained causes as ``context: cause: ...``."""
    parts = []
    current = error
    while current is not None:
        message = str(current).strip()
        if isinstance(current, subprocess.CalledProcessError) and current.stderr:
            message = f"{message} ({current.stderr.strip()})"
        if message and message not in parts:
            parts.append(message)
        current = current.__cause__
    return ": ".join(parts) or error.__class__.__name__
