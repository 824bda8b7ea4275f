from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Author, User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface rather than on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_active_authors(self) -> Sequence[Author]:
        """Active accounts ordered by ascending id."""

        raise NotImplementedError
