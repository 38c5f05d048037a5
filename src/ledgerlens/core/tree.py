"""
Hierarchical account trees.

Accounts are colon-delimited paths (``Expenses:Food:Groceries``). The tree is a
list of root nodes; each node owns its children and holds no reference to its
parent.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from .accounts import ACCOUNT_SEPARATOR

_DIGITS = re.compile(r"(\d+)")


@dataclass
class AccountTreeNode:
    """
    One level of the account hierarchy.

    Attributes:
        id: Fully qualified account path up to and including this segment
        account: This level's own segment name
        sub_rows: Child nodes, unique by segment name, or None for a leaf
        expanded: UI state flag, ignored by the engine
    """

    id: str
    account: str
    sub_rows: Optional[list[AccountTreeNode]] = None
    expanded: Optional[bool] = None

    def find(self, account: str) -> Optional[AccountTreeNode]:
        """Return the direct child named ``account``, if any."""
        return _find(self.sub_rows or [], account)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the nested mapping consumed by table/tree views."""
        out: dict[str, Any] = {"id": self.id, "account": self.account}
        if self.sub_rows is not None:
            out["subRows"] = [child.to_dict() for child in self.sub_rows]
        if self.expanded is not None:
            out["expanded"] = self.expanded
        return out


def _find(nodes: list[AccountTreeNode], account: str) -> Optional[AccountTreeNode]:
    for node in nodes:
        if node.account == account:
            return node
    return None


def insert_account(
    nodes: list[AccountTreeNode], account_path: str, parent: Optional[str] = None
) -> None:
    """
    Insert ``account_path`` below ``nodes``, creating missing levels.

    Args:
        nodes: Sibling list to insert into (modified in place)
        account_path: Colon-delimited path relative to ``parent``
        parent: Fully qualified path of the level owning ``nodes``
    """
    head, sep, rest = account_path.partition(ACCOUNT_SEPARATOR)
    full_name = f"{parent}{ACCOUNT_SEPARATOR}{head}" if parent else head

    node = _find(nodes, head)
    if node is None:
        node = AccountTreeNode(id=full_name, account=head)
        nodes.append(node)

    if sep:
        if node.sub_rows is None:
            node.sub_rows = []
        insert_account(node.sub_rows, rest, full_name)


def natural_key(text: str) -> tuple:
    """
    Sort key comparing embedded numbers by value.

    ``"Account9"`` sorts before ``"Account10"``. Letters compare case-insensitively
    first; on a tie lowercase sorts before uppercase. Digit runs sort before
    letters.

    Accents are ignored at first, so ``"Éducation"`` sorts between ``"Ausgaben"``
    and ``"Frais"``; on a tie the unaccented name comes first.
    """
    primary = []
    for chunk in _DIGITS.split(text):
        if not chunk:
            continue
        if chunk.isdecimal():
            primary.append((0, int(chunk), ""))
        else:
            primary.append((1, 0, _fold(chunk)))
    return tuple(primary), text.swapcase()


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def sort_account_tree(nodes: list[AccountTreeNode]) -> None:
    """Sort every level of the tree by account name, in place."""
    nodes.sort(key=lambda node: natural_key(node.account))
    for node in nodes:
        if node.sub_rows:
            sort_account_tree(node.sub_rows)


def build_account_tree(accounts: Iterable[str]) -> list[AccountTreeNode]:
    """Build a sorted tree from a flat list of account paths."""
    nodes: list[AccountTreeNode] = []
    for account in accounts:
        if account:
            insert_account(nodes, account)
    sort_account_tree(nodes)
    return nodes


def iter_tree(
    nodes: Iterable[AccountTreeNode], depth: int = 0
) -> Iterator[tuple[int, AccountTreeNode]]:
    """Walk the tree depth-first, yielding ``(depth, node)`` pairs."""
    for node in nodes:
        yield depth, node
        if node.sub_rows:
            yield from iter_tree(node.sub_rows, depth + 1)
