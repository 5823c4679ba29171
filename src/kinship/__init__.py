"""Kinship relationship inference and query engine."""

from .graph import (
    DEFAULT_MAX_DISTANCE,
    RELATIVE_FILTERS,
    build_graph,
    edge_type,
    find_paths,
    path_confidence,
    query_relatives,
)
from .inference import declare_relationship, infer_relationships
from .labels import label_between, label_path
from .models import (
    REVERSE_TYPES,
    Gender,
    PathSegment,
    Person,
    Relationship,
    RelationshipPath,
    RelationshipType,
    RelativeMatch,
    Severity,
    ValidationError,
    ValidationErrorType,
    reverse_type,
)
from .state import FamilyTreeState
from .tree import FamilyTree, TreeNode, build_family_tree
from .validation import validate

__all__ = [
    "DEFAULT_MAX_DISTANCE",
    "FamilyTree",
    "FamilyTreeState",
    "RELATIVE_FILTERS",
    "REVERSE_TYPES",
    "Gender",
    "PathSegment",
    "Person",
    "Relationship",
    "RelationshipPath",
    "RelationshipType",
    "RelativeMatch",
    "Severity",
    "TreeNode",
    "ValidationError",
    "ValidationErrorType",
    "build_family_tree",
    "build_graph",
    "declare_relationship",
    "edge_type",
    "find_paths",
    "infer_relationships",
    "label_between",
    "label_path",
    "path_confidence",
    "query_relatives",
    "reverse_type",
    "validate",
]
