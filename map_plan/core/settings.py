"""Resolution settings.

ResolutionSettings is a Pydantic model so sessions can be configured from
plain dicts (e.g. loaded from a project config file).
"""

from __future__ import annotations

from pydantic import BaseModel


class ResolutionSettings(BaseModel):
    """Configuration for a mapping resolution session.

    Attributes:
        strict: Raise StrictModeViolation from a top-level ``build_plan``
            when any property had to be omitted for a reason other than an
            explicit ignore. Off by default: omissions are silent.
        log_omissions: Emit a DEBUG log record for every omission.
    """

    strict: bool = False
    log_omissions: bool = True
