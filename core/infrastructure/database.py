"""
Database utilities and transaction management.
"""

from typing import Callable

from asgiref.sync import sync_to_async
from django.db import transaction


def atomic_async(func: Callable):
    """
    Run a synchronous ORM function inside ``transaction.atomic`` from async code.

    The whole function body executes in one worker thread and one
    transaction, so every write it makes commits or rolls back together.

    Usage:
        class Repository:
            @atomic_async
            def approve(self, ...):
                # Database operations
                ...

        await repository.approve(...)
    """
    return sync_to_async(transaction.atomic(func))
