"""Tree subpackage for the parsed-document data model.

Re-exports the public API for the tree module:
- Node: dataclass representing one named, typed entry
- NodeKind: StrEnum of the seven node kinds
- Tree: insertion-ordered collection of sibling nodes
- infer_scalar_kind: lexical classification of raw scalar text
"""

from ymltree.tree.collection import Tree
from ymltree.tree.inference import infer_scalar_kind
from ymltree.tree.kinds import NodeKind
from ymltree.tree.nodes import Node

__all__ = ["Node", "NodeKind", "Tree", "infer_scalar_kind"]
