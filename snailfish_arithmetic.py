"""
Aritmetica numerelor "snailfish".

Un numar snailfish este un arbore binar:
    pair := NUMBER | '[' pair ',' pair ']'

ADUNAREA:
---------
    a + b = reduce([a,b])

REDUCEREA (pana la punct fix, cu prioritate stricta):
    1. daca exista o pereche de doua numere la adancime >= 4 -> EXPLODE
       (cea mai din stanga), apoi se reia de la pasul 1
    2. altfel, daca exista un numar >= 10 -> SPLIT (cel mai din stanga),
       apoi se reia de la pasul 1
    3. altfel numarul este redus

EXPLODE:  [[[[[9,8],1],2],3],4] -> [[[[0,9],2],3],4]
    perechea [9,8] devine 0; 9 se aduna la primul numar din stanga (nu exista,
    se pierde), 8 la primul numar din dreapta (1 -> 9)

SPLIT:    11 -> [5,6],  10 -> [5,5]

MAGNITUDINE: |n| = n, |[l,r]| = 3*|l| + 2*|r|

Arborii sunt imutabili: explode / split intorc un arbore NOU si un flag
"s-a schimbat ceva". Originalele raman neatinse, deci aceeasi pereche de
arbori poate fi adunata de oricate ori (vezi max_pairwise_sum_magnitude).
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import reduce as fold
from typing import Dict, List, Optional, Sequence, Tuple, Union

EXPLODE_DEPTH = 4
SPLIT_THRESHOLD = 10


class PairParseError(ValueError):
    """Textul nu respecta gramatica pair := NUMBER | '[' pair ',' pair ']'."""


@dataclass(frozen=True)
class Num:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Pair:
    left: "PairTree"
    right: "PairTree"

    def __str__(self) -> str:
        return f"[{self.left},{self.right}]"


PairTree = Union[Num, Pair]


# =============================================================================
# PARSARE (recursive descent)
# =============================================================================

class _PairParser:

    __slots__ = ("_text", "_pos")

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def parse_all(self) -> List[PairTree]:
        trees = []
        self._skip_whitespace()
        while self._pos < len(self._text):
            trees.append(self._parse_pair())
            self._skip_whitespace()

        if not trees:
            raise PairParseError("Nu exista niciun numar snailfish in text!")
        return trees

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def _expect(self, c: str) -> None:
        if self._pos >= len(self._text):
            raise PairParseError(f"Se astepta {c!r} la pozitia {self._pos}, textul s-a terminat")
        if self._text[self._pos] != c:
            raise PairParseError(f"Se astepta {c!r} la pozitia {self._pos}, am gasit {self._text[self._pos]!r}")
        self._pos += 1

    def _parse_pair(self) -> PairTree:
        if self._pos >= len(self._text):
            raise PairParseError(f"Textul s-a terminat la pozitia {self._pos}, se astepta '[' sau o cifra")

        if self._text[self._pos] == "[":
            self._pos += 1
            left = self._parse_pair()
            self._expect(",")
            right = self._parse_pair()
            self._expect("]")
            return Pair(left, right)

        start = self._pos
        # doar cifre ASCII, gramatica nu are semn
        while self._pos < len(self._text) and self._text[self._pos] in "0123456789":
            self._pos += 1
        if start == self._pos:
            raise PairParseError(f"Caracter neasteptat {self._text[start]!r} la pozitia {start}")
        return Num(int(self._text[start:self._pos]))


def parse_pairs(text: str) -> List[PairTree]:
    # Unul sau mai multi arbori separati prin whitespace (de obicei cate unul pe linie)
    return _PairParser(text).parse_all()


def parse_pair(text: str) -> PairTree:
    trees = parse_pairs(text)
    if len(trees) != 1:
        raise PairParseError(f"Se astepta un singur numar snailfish, am gasit {len(trees)}")
    return trees[0]


# =============================================================================
# REGULI DE RESCRIERE
# =============================================================================

def _add_to_leftmost(tree: PairTree, amount: int) -> PairTree:
    if amount == 0:
        return tree
    if isinstance(tree, Num):
        return Num(tree.value + amount)
    return Pair(_add_to_leftmost(tree.left, amount), tree.right)


def _add_to_rightmost(tree: PairTree, amount: int) -> PairTree:
    if amount == 0:
        return tree
    if isinstance(tree, Num):
        return Num(tree.value + amount)
    return Pair(tree.left, _add_to_rightmost(tree.right, amount))


def _explode(tree: PairTree, depth: int) -> Tuple[bool, PairTree, int, int]:
    # Intoarce (s-a schimbat, arbore nou, rest de adunat la stanga, rest de adunat la dreapta)
    if isinstance(tree, Num):
        return False, tree, 0, 0

    if depth >= EXPLODE_DEPTH and isinstance(tree.left, Num) and isinstance(tree.right, Num):
        return True, Num(0), tree.left.value, tree.right.value

    changed, new_left, carry_left, carry_right = _explode(tree.left, depth + 1)
    if changed:
        # vecinul din dreapta al exploziei = cea mai din stanga frunza a fratelui drept
        return True, Pair(new_left, _add_to_leftmost(tree.right, carry_right)), carry_left, 0

    changed, new_right, carry_left, carry_right = _explode(tree.right, depth + 1)
    if changed:
        return True, Pair(_add_to_rightmost(tree.left, carry_left), new_right), 0, carry_right

    return False, tree, 0, 0


def explode(tree: PairTree) -> Tuple[bool, PairTree]:
    """
    Explodeaza cea mai din stanga pereche de numere aflata la adancime >= 4.

    Radacina are adancimea 0. Resturile care nu au vecin (explozie la
    marginea arborelui) se pierd.

    Returns:
        (s-a schimbat, arborele rezultat)
    """
    changed, new_tree, _, _ = _explode(tree, 0)
    return changed, new_tree


def split(tree: PairTree) -> Tuple[bool, PairTree]:
    """Inlocuieste cel mai din stanga numar >= 10 cu [floor(n/2), ceil(n/2)]."""
    if isinstance(tree, Num):
        if tree.value >= SPLIT_THRESHOLD:
            return True, Pair(Num(tree.value // 2), Num((tree.value + 1) // 2))
        return False, tree

    changed, new_left = split(tree.left)
    if changed:
        return True, Pair(new_left, tree.right)

    changed, new_right = split(tree.right)
    if changed:
        return True, Pair(tree.left, new_right)

    return False, tree


def reduce_with_stats(tree: PairTree) -> Tuple[PairTree, int, int]:
    """
    Reduce arborele pana la punct fix.

    Explozia are mereu prioritate: un split se incearca doar cand nu mai
    exista nicio pereche de explodat, iar dupa fiecare split se reia cu explode.

    Returns:
        (arborele redus, numar de explozii, numar de split-uri)
    """
    explodes = 0
    splits = 0

    while True:
        changed, tree = explode(tree)
        if changed:
            explodes += 1
            continue

        changed, tree = split(tree)
        if changed:
            splits += 1
            continue

        return tree, explodes, splits


def reduce(tree: PairTree) -> PairTree:
    reduced, _, _ = reduce_with_stats(tree)
    return reduced


def add(a: PairTree, b: PairTree) -> PairTree:
    # NU e asociativa: o suma de mai multi arbori se face strict de la stanga la dreapta
    return reduce(Pair(a, b))


def magnitude(tree: PairTree) -> int:
    if isinstance(tree, Num):
        return tree.value
    return 3 * magnitude(tree.left) + 2 * magnitude(tree.right)


def depth(tree: PairTree) -> int:
    # Adancimea maxima a perechilor (un numar simplu are adancimea 0)
    if isinstance(tree, Num):
        return 0
    return 1 + max(depth(tree.left), depth(tree.right))


# =============================================================================
# CALCULE DERIVATE
# =============================================================================

def sum_all(trees: Sequence[PairTree]) -> Optional[int]:
    # Magnitudinea sumei (fold la stanga); None pentru lista goala
    if not trees:
        return None
    return magnitude(fold(add, trees))


def sum_all_steps(trees: Sequence[PairTree]) -> List[Dict]:
    """
    Ca sum_all, dar intoarce cate o inregistrare pentru fiecare pas al fold-ului.

    Pasul 0 este primul arbore (nereducat); pasul i >= 1 este suma primilor
    i + 1 arbori.
    """
    steps: List[Dict] = []
    if not trees:
        return steps

    current = trees[0]
    steps.append({
        "step": 0,
        "magnitude": magnitude(current),
        "depth": depth(current),
        "explodes": 0,
        "splits": 0,
    })

    for i, tree in enumerate(trees[1:], start=1):
        current, explodes, splits = reduce_with_stats(Pair(current, tree))
        steps.append({
            "step": i,
            "magnitude": magnitude(current),
            "depth": depth(current),
            "explodes": explodes,
            "splits": splits,
        })

    return steps


def _pair_sum_magnitude(pair: Tuple[PairTree, PairTree]) -> int:
    # la nivel de modul ca sa poata fi trimisa proceselor din pool
    return magnitude(add(pair[0], pair[1]))


def max_pairwise_sum_magnitude(trees: Sequence[PairTree], workers: Optional[int] = None) -> Optional[int]:
    """
    Magnitudinea maxima a lui trees[i] + trees[j], peste toate perechile i != j.

    Se incearca ambele ordini (i, j) si (j, i): adunarea nu este garantat
    comutativa ca magnitudine.

    Args:
        trees: arborii de combinat
        workers: daca > 1, perechile se evalueaza pe un ProcessPoolExecutor

    Returns:
        maximul, sau None daca sunt mai putin de 2 arbori
    """
    if len(trees) < 2:
        return None

    pairs = [
        (trees[i], trees[j])
        for i in range(len(trees))
        for j in range(len(trees))
        if i != j
    ]

    if workers is not None and workers > 1:
        chunksize = max(1, len(pairs) // (workers * 4))
        with ProcessPoolExecutor(max_workers=workers) as executor:
            return max(executor.map(_pair_sum_magnitude, pairs, chunksize=chunksize))

    return max(_pair_sum_magnitude(pair) for pair in pairs)
