from __future__ import annotations

import threading
from typing import Dict, List, Optional

from user_api.models import User


class InMemoryUserStore:
    """Thread-safe in-memory user store.

    Storage semantics:
    - Stored only in the API process memory (cleared on restart).
    - Not shared across multiple API instances.
    - Ids start at 1, grow by one per insert and are never reused, even after
      the record they belonged to is removed.

    Id allocation and the map write happen under the same lock, so concurrent
    inserts can neither share an id nor lose a record.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {}
        self._next_id = 1

    def insert(self, *, name: str, email: str) -> User:
        with self._lock:
            user = User(id=self._next_id, name=name, email=email)
            self._users[user.id] = user
            self._next_id += 1
            return user

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def update(self, user_id: int, *, name: str, email: str) -> Optional[User]:
        with self._lock:
            if user_id not in self._users:
                return None
            user = User(id=user_id, name=name, email=email)
            self._users[user_id] = user
            return user

    def remove(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def contains(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._users

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
