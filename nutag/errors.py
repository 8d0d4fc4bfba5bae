class NutagError(Exception):
    """Base class for every error nutag reports to the user."""


class ParseError(NutagError, ValueError):
    def __init__(self, raw: str, reason: str = ""):
        self.raw = raw
        self.reason = reason
        message = f"'{raw}' is not a valid tag"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConflictingBumpError(NutagError, ValueError):
    def __init__(self, levels):
        self.levels = tuple(levels)
        flags = ", ".join(f"--{level}" for level in self.levels)
        super().__init__(f"only one of {flags} may be given")


class VcsError(NutagError):
    def __init__(self, command, stderr: str = ""):
        self.command = list(command)
        self.stderr = stderr.strip()
        message = f"'{' '.join(self.command)}' failed"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class GitHubError(NutagError):
    pass
