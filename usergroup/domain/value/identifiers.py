"""Strongly typed identifiers for account entities.

Using NewType keeps account and linkage IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
AccountLinkageId = NewType("AccountLinkageId", UUID)
