"""Rooted display tree built from people and relationship records.

Nodes live in a flat arena and refer to each other by index, so building a deep or
malformed tree never recurses.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from .models import Person, Relationship, RelationshipType


@dataclass
class TreeNode:
    index: int
    person: Person
    generation: int  # 0 = root, negative = ancestors, positive = descendants
    side: str  # "direct", "paternal" or "maternal"
    parents: list[int] = field(default_factory=list)
    children: list[int] = field(default_factory=list)
    spouses: list[int] = field(default_factory=list)
    is_root: bool = False


@dataclass
class FamilyTree:
    nodes: list[TreeNode]

    @property
    def root(self) -> TreeNode:
        return self.nodes[0]

    def parents_of(self, node: TreeNode) -> list[TreeNode]:
        return [self.nodes[i] for i in node.parents]

    def children_of(self, node: TreeNode) -> list[TreeNode]:
        return [self.nodes[i] for i in node.children]

    def spouses_of(self, node: TreeNode) -> list[TreeNode]:
        return [self.nodes[i] for i in node.spouses]


def _side(generation: int) -> str:
    if generation == 0:
        return "direct"
    return "paternal" if generation < 0 else "maternal"


def build_family_tree(
    people: Sequence[Person],
    relationships: Sequence[Relationship],
    root_id: str,
    max_depth: int | None = None,
) -> FamilyTree | None:
    """
    Expand the family around `root_id` into a tree of parents, children and spouses.

    Each branch carries its own visited set: a person may appear on several branches
    but never twice along one branch. `max_depth` bounds branch length when given.

    Node count grows with the number of distinct branches, not the number of people:
    intermarried or pedigree-collapsed families expand very quickly, so callers showing
    whole trees should pass a `max_depth`.

    Returns:
        The tree, or None when `root_id` is not a known person.
    """
    people_by_id = {p.id: p for p in people}
    if root_id not in people_by_id:
        return None

    parents: dict[str, list[str]] = {}
    children: dict[str, list[str]] = {}
    spouses: dict[str, list[str]] = {}
    for rel in relationships:
        if rel.relationship_type == RelationshipType.PARENT:
            parents.setdefault(rel.related_person_id, []).append(rel.person_id)
            children.setdefault(rel.person_id, []).append(rel.related_person_id)
        elif rel.relationship_type == RelationshipType.SPOUSE:
            spouses.setdefault(rel.person_id, []).append(rel.related_person_id)

    nodes: list[TreeNode] = []
    # (person id, generation, branch visited set, owner index, owner list name, depth)
    stack: list[tuple[str, int, frozenset[str], int | None, str | None, int]] = [
        (root_id, 0, frozenset(), None, None, 0)
    ]

    while stack:
        person_id, generation, visited, owner, kind, depth = stack.pop()
        person = people_by_id.get(person_id)
        if person_id in visited or person is None:
            continue

        node = TreeNode(
            index=len(nodes),
            person=person,
            generation=generation,
            side=_side(generation),
            is_root=person_id == root_id and owner is None,
        )
        nodes.append(node)
        if owner is not None:
            getattr(nodes[owner], kind).append(node.index)

        if max_depth is not None and depth >= max_depth:
            continue

        branch = visited | {person_id}
        pending = (
            [(pid, generation - 1, "parents") for pid in parents.get(person_id, [])]
            + [(cid, generation + 1, "children") for cid in children.get(person_id, [])]
            + [(sid, generation, "spouses") for sid in spouses.get(person_id, [])]
        )
        # Reversed so the stack pops them in declaration order
        for related_id, related_generation, related_kind in reversed(pending):
            stack.append((related_id, related_generation, branch, node.index, related_kind, depth + 1))

    return FamilyTree(nodes=nodes)
