"""
Command result model.

Structured representation of one finished subprocess.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CommandResult(BaseModel):
    """
    Captured output of a subprocess.

    stdout/stderr are None when the stream could not be decoded as UTF-8,
    or when the process never launched. exit_status is None only when the
    process never launched.

    exit_status is DIAGNOSTIC ONLY. Callers decide on stdout presence,
    never on the exit status.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stdout: Optional[str] = None
    """Decoded standard output."""

    stderr: Optional[str] = None
    """Decoded standard error."""

    exit_status: Optional[int] = None
    """Process exit status (None if launch failed)."""

    @property
    def launched(self) -> bool:
        return self.exit_status is not None

    def first_stdout_line(self) -> Optional[str]:
        """
        First line of stdout, stripped.

        Returns None when stdout is absent or the first line is empty;
        an empty first line means "no output" for every caller.
        """
        if self.stdout is None:
            return None
        lines = self.stdout.splitlines()
        if not lines:
            return None
        line = lines[0].strip()
        return line or None
