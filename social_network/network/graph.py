"""
Social graph for the social network explorer.

Holds users keyed by integer id and an undirected adjacency list,
and answers the connection-tree, friend-suggestion and influence
queries over them.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Iterator, Tuple

import structlog

logger = structlog.get_logger(__name__)

# Returned by handle lookup when no user matches.
NOT_FOUND = None

PLACEHOLDER_NAME = "<unknown>"


@dataclass(frozen=True)
class User:
    """A user record. Placeholders stand in for ids seen only in edges."""
    user_id: int
    name: str
    handle: str
    placeholder: bool = False


@dataclass(frozen=True)
class Suggestion:
    """A friend suggestion with its number of mutual friends."""
    user_id: int
    mutual_count: int


@dataclass(frozen=True)
class Influence:
    """A user's degree, counting repeated edges."""
    user_id: int
    connection_count: int


class SocialGraph:
    """
    An undirected graph of users.

    Supports:
    - Adding users and connections (additive only)
    - Handle lookup
    - Depth-bounded connection trees
    - Friend-of-friend suggestions
    - Degree ranking
    """

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._adjacency: Dict[int, List[int]] = {}
        self._edge_count = 0

    def add_user(self, user_id: int, name: str, handle: str) -> User:
        """
        Insert or overwrite a user record.

        Existing connections of the id are kept, so users may be
        added before or after the edges that reference them.
        """
        user = User(user_id=user_id, name=name, handle=handle)
        self._users[user_id] = user
        self._adjacency.setdefault(user_id, [])
        return user

    def add_connection(self, user_a: int, user_b: int) -> None:
        """Connect two users in both directions."""
        self._ensure_node(user_a)
        self._ensure_node(user_b)

        self._adjacency[user_a].append(user_b)
        self._adjacency[user_b].append(user_a)
        self._edge_count += 1

    def _ensure_node(self, user_id: int) -> None:
        if user_id in self._users:
            return

        logger.debug("placeholder_user_created", user_id=user_id)
        self._users[user_id] = User(
            user_id=user_id,
            name=PLACEHOLDER_NAME,
            handle="",
            placeholder=True,
        )
        self._adjacency.setdefault(user_id, [])

    def get_connections(self, user_id: int) -> List[int]:
        """Neighbors of a user in insertion order, empty if unknown."""
        return list(self._adjacency.get(user_id, []))

    def get_user(self, user_id: int) -> Optional[User]:
        """Get a user record by id."""
        return self._users.get(user_id)

    def get_user_id_by_handle(self, handle: str) -> Optional[int]:
        """
        Find a user id by handle.

        Scans users in ascending id order and returns the first
        match, or NOT_FOUND. Handles are case-sensitive.
        """
        for user_id in sorted(self._users):
            user = self._users[user_id]
            if not user.placeholder and user.handle == handle:
                return user_id
        return NOT_FOUND

    def degree(self, user_id: int) -> int:
        """Number of adjacency entries, repeated edges included."""
        return len(self._adjacency.get(user_id, []))

    def connection_tree(
        self,
        user_id: int,
        max_depth: int = 2,
    ) -> List[Tuple[int, int]]:
        """
        Depth-first walk from a user, as (depth, user_id) pairs.

        The root is depth 0 and depths up to max_depth are included.
        There is no visited set: a user reachable along several paths,
        the root included, appears once per path.
        """
        return list(self._walk(user_id, 0, max_depth))

    def _walk(self, node: int, depth: int, max_depth: int) -> Iterator[Tuple[int, int]]:
        if depth > max_depth:
            return

        yield depth, node
        for neighbor in self._adjacency.get(node, []):
            yield from self._walk(neighbor, depth + 1, max_depth)

    def display_connections_recursive(
        self,
        user_id: int,
        max_depth: int = 2,
    ) -> List[str]:
        """Indented text lines for the connection tree of a user."""
        lines = []
        for depth, node in self.connection_tree(user_id, max_depth):
            prefix = " " * (4 * depth)
            marker = "|-- " if depth > 0 else ""
            lines.append(f"{prefix}{marker}{self.describe(node)}")
        return lines

    def describe(self, user_id: int) -> str:
        """Format a user as 'name (handle)'."""
        user = self._users.get(user_id)
        if user is None:
            return f"{PLACEHOLDER_NAME} ()"
        return f"{user.name} ({user.handle})"

    def suggest_friends(self, user_id: int) -> List[Suggestion]:
        """
        Suggest friends of friends, ranked by mutual friend count.

        Direct friends and the user are excluded. Ties are ordered by
        ascending id. An empty list means there is nothing to suggest.
        """
        direct_friends = set(self._adjacency.get(user_id, []))
        mutual_counts: Dict[int, int] = {}

        for friend_id in sorted(direct_friends):
            for candidate in self._adjacency.get(friend_id, []):
                if candidate != user_id and candidate not in direct_friends:
                    mutual_counts[candidate] = mutual_counts.get(candidate, 0) + 1

        ranked = sorted(mutual_counts.items(), key=lambda item: (-item[1], item[0]))
        return [Suggestion(user_id=uid, mutual_count=count) for uid, count in ranked]

    def influential_users(self) -> List[Influence]:
        """Rank every user by degree, ties by ascending id."""
        ranked = sorted(
            ((uid, len(neighbors)) for uid, neighbors in self._adjacency.items()),
            key=lambda item: (-item[1], item[0]),
        )
        return [Influence(user_id=uid, connection_count=count) for uid, count in ranked]

    @property
    def user_ids(self) -> List[int]:
        """All user ids in ascending order."""
        return sorted(self._users)

    @property
    def user_count(self) -> int:
        """Number of users, placeholders included."""
        return len(self._users)

    @property
    def edge_count(self) -> int:
        """Number of connections added."""
        return self._edge_count

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __repr__(self) -> str:
        return f"SocialGraph(users={self.user_count}, edges={self.edge_count})"
