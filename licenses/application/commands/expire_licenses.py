"""
ExpireLicensesCommand.

Command run by the scheduled expiry job.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ExpireLicensesCommand:
    """Command to mark ACTIVE licenses past their expiry date as EXPIRED."""

    current_time: Optional[datetime] = None
    dry_run: bool = False
