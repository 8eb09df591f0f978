"""
Moteur de mutation de l'arbre de blocs.

Toutes les opérations prennent les racines courantes et retournent un NOUVEAU
tuple de racines : seul le chemin racine → cible est recopié, les sous-arbres
non touchés sont partagés par référence. Un id introuvable retourne le tuple
d'entrée inchangé (même objet) : c'est une référence périmée (édition
debouncée arrivée après une suppression), pas une erreur.
"""
import copy
import logging
from typing import Callable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from ..core.ids import new_id
from ..core.schemas import Node, Roots

log = logging.getLogger(__name__)

# Clés acceptées par update() ; props/style sont fusionnés, le reste remplacé
PATCHABLE_FIELDS = ("props", "style", "content", "className", "children")
_MERGED_FIELDS = ("props", "style")


# ── Requêtes ──────────────────────────────────────────────────────────────────

def iter_nodes(roots: Sequence[Node]) -> Iterator[Node]:
    """Parcours en profondeur, ordre de rendu."""
    for node in roots:
        yield node
        yield from iter_nodes(node.children)


def find_node(roots: Sequence[Node], node_id: str) -> Optional[Node]:
    for node in iter_nodes(roots):
        if node.id == node_id:
            return node
    return None


def find_parent(roots: Sequence[Node], node_id: str) -> Optional[Node]:
    """Parent direct de node_id (None pour une racine ou un id inconnu)."""
    for node in iter_nodes(roots):
        if any(child.id == node_id for child in node.children):
            return node
    return None


def contains(roots: Sequence[Node], node_id: str) -> bool:
    return find_node(roots, node_id) is not None


def collect_ids(roots: Sequence[Node]) -> List[str]:
    """Tous les ids de l'arbre (doublons conservés, pour les vérifier)."""
    return [node.id for node in iter_nodes(roots)]


def root_index(roots: Sequence[Node], node_id: str) -> int:
    for i, node in enumerate(roots):
        if node.id == node_id:
            return i
    return -1


def subtree_ids(node: Node) -> Set[str]:
    return {n.id for n in iter_nodes((node,))}


# ── Réécriture par copie de chemin ────────────────────────────────────────────

def _splice(nodes: Roots, node_id: str, fn: Callable[[Node], Tuple[Node, ...]]) -> Roots:
    """Remplace le noeud node_id par fn(node) (0, 1 ou plusieurs noeuds)."""
    for i, node in enumerate(nodes):
        if node.id == node_id:
            return nodes[:i] + tuple(fn(node)) + nodes[i + 1:]
        if node.children:
            children = _splice(node.children, node_id, fn)
            if children is not node.children:
                return nodes[:i] + (node.model_copy(update={"children": children}),) + nodes[i + 1:]
    return nodes


def map_node(roots: Sequence[Node], node_id: str, fn: Callable[[Node], Node]) -> Roots:
    """Remplace node_id par fn(node) ; utilisé par les moteurs de layout."""
    return _splice(tuple(roots), node_id, lambda node: (fn(node),))


def clone_with_fresh_ids(node: Node) -> Node:
    """Copie profonde du sous-arbre, un id neuf pour chaque noeud."""
    return node.model_copy(update={
        "id": new_id(),
        "props": copy.deepcopy(node.props),
        "style": copy.deepcopy(node.style),
        "children": tuple(clone_with_fresh_ids(c) for c in node.children),
    })


def _ensure_fresh(roots: Sequence[Node], node: Node) -> Node:
    """Garantit qu'aucun id du noeud inséré n'existe déjà dans l'arbre."""
    existing = set(collect_ids(roots))
    if existing & subtree_ids(node):
        log.debug("insert: ids déjà présents pour %s, ré-identification", node.id)
        return clone_with_fresh_ids(node)
    return node


def _clamp_index(index: Optional[int], size: int) -> int:
    if index is None:
        return size
    return max(0, min(index, size))


# ── Opérations ────────────────────────────────────────────────────────────────

def insert(roots: Sequence[Node], node: Node, index: Optional[int] = None) -> Roots:
    """Insère un noeud à la position racine index (ajout en fin par défaut)."""
    roots = tuple(roots)
    node = _ensure_fresh(roots, node)
    at = _clamp_index(index, len(roots))
    return roots[:at] + (node,) + roots[at:]


def insert_child(
    roots: Sequence[Node],
    parent_id: str,
    node: Node,
    index: Optional[int] = None,
) -> Roots:
    """Insère un noeud dans les enfants de parent_id (ajout en fin par défaut)."""
    roots = tuple(roots)
    node = _ensure_fresh(roots, node)

    def _add(parent: Node) -> Node:
        at = _clamp_index(index, len(parent.children))
        children = parent.children[:at] + (node,) + parent.children[at:]
        return parent.model_copy(update={"children": children})

    return map_node(roots, parent_id, _add)


def apply_patch(node: Node, patch: Mapping) -> Node:
    """
    Applique un patch à un noeud.

    props/style : fusion superficielle, une valeur None retire la clé.
    content/className/children : remplacement.
    """
    changes = {}
    for key, value in patch.items():
        if key in _MERGED_FIELDS:
            merged = {**getattr(node, key), **value}
            changes[key] = {k: v for k, v in merged.items() if v is not None}
        elif key == "className":
            changes["class_name"] = value
        elif key == "children":
            changes["children"] = tuple(value)
        else:
            changes[key] = value
    return node.model_copy(update=changes)


def _check_patch(patch: Mapping) -> None:
    unknown = set(patch) - set(PATCHABLE_FIELDS)
    if unknown:
        raise ValueError(f"Champs non modifiables : {sorted(unknown)}")


def update(roots: Sequence[Node], node_id: str, patch: Mapping) -> Roots:
    """Applique patch au noeud node_id où qu'il soit ; no-op si absent."""
    _check_patch(patch)
    return map_node(roots, node_id, lambda node: apply_patch(node, patch))


def delete(roots: Sequence[Node], node_id: str) -> Roots:
    """Retire le noeud et tout son sous-arbre (aucun re-parentage)."""
    return _splice(tuple(roots), node_id, lambda node: ())


def duplicate_subtree(roots: Sequence[Node], node_id: str) -> Tuple[Roots, Optional[Node]]:
    """Comme duplicate() mais retourne aussi le clone (None si id absent)."""
    clones: List[Node] = []

    def _dup(node: Node) -> Tuple[Node, ...]:
        clones.append(clone_with_fresh_ids(node))
        return (node, clones[0])

    new_roots = _splice(tuple(roots), node_id, _dup)
    return new_roots, (clones[0] if clones else None)


def duplicate(roots: Sequence[Node], node_id: str) -> Roots:
    """Clone profond (ids neufs) inséré juste après l'original, même niveau."""
    return duplicate_subtree(roots, node_id)[0]


def reorder(roots: Sequence[Node], from_index: int, to_index: int) -> Roots:
    """Déplace la racine from_index vers to_index (déplacement stable)."""
    roots = tuple(roots)
    size = len(roots)
    if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
        return roots
    items = list(roots)
    item = items.pop(from_index)
    items.insert(to_index, item)
    return tuple(items)


def move_to_gap(roots: Sequence[Node], node_id: str, gap_index: int) -> Roots:
    """
    Déplace une racine vers l'intervalle gap_index (0..len), c'est-à-dire
    avant la racine qui occupe actuellement cette position.
    """
    old = root_index(roots, node_id)
    if old == -1:
        return tuple(roots)
    gap = _clamp_index(gap_index, len(roots))
    target = gap - 1 if old < gap else gap
    return reorder(roots, old, target)


def move_up(roots: Sequence[Node], node_id: str) -> Roots:
    i = root_index(roots, node_id)
    if i <= 0:
        return tuple(roots)
    return reorder(roots, i, i - 1)


def move_down(roots: Sequence[Node], node_id: str) -> Roots:
    i = root_index(roots, node_id)
    if i == -1 or i >= len(roots) - 1:
        return tuple(roots)
    return reorder(roots, i, i + 1)
