"""Base exception for failures that abort a site build.

Every stage raises its own subclass (defined next to the code that raises
it); the command-line tool catches this base class and turns it into a
non-zero exit status.
"""

from __future__ import annotations


class BiblioNotesError(RuntimeError):
    """Raised when the build cannot continue."""
