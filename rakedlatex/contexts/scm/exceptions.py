"""Custom exceptions for the SCM context."""

from typing import Optional


class ScmParseError(Exception):
    """
    Exception raised when a source-control client's output lacks an expected field.

    Usually means the client's output format changed (new version, localized
    messages) or the directory is not a checkout.

    Attributes:
        message: Error description
        client_name: Name of the SCM client (e.g., 'Mercurial')
        field_name: Field that could not be extracted ('revision' or 'date')
        raw_output: The captured client output
    """

    def __init__(
        self,
        message: str,
        client_name: Optional[str] = None,
        field_name: Optional[str] = None,
        raw_output: Optional[str] = None,
    ):
        self.message = message
        self.client_name = client_name
        self.field_name = field_name
        self.raw_output = raw_output

        parts = [message]

        if client_name and field_name:
            parts.append(f"\nClient: {client_name}")
            parts.append(f"Field: {field_name}")

        if raw_output is not None:
            snippet = raw_output[:200] + "..." if len(raw_output) > 200 else raw_output
            parts.append(f"\nActual output:\n{snippet}")

        super().__init__("\n".join(parts))
