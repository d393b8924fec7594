"""
Evaluarea unui arbore de pachete BITS ca expresie aritmetica.

Tipurile de operator:
    0 -> suma copiilor               (oricati)
    1 -> produsul copiilor           (oricati)
    2 -> minimul copiilor            (cel putin unul)
    3 -> maximul copiilor            (cel putin unul)
    5 -> 1 daca c0 > c1, altfel 0    (exact doi)
    6 -> 1 daca c0 < c1, altfel 0    (exact doi)
    7 -> 1 daca c0 == c1, altfel 0   (exact doi)

Copiii se evalueaza depth-first, in ordinea in care apar.
"""

import math
import operator
from typing import Callable, Dict, List

from packet_decoding import End, Literal, Packet, children_of


class EvalError(ValueError):
    """Arborele de pachete nu poate fi evaluat."""


class MissingOperandsError(EvalError):
    """Un operator de comparatie nu are exact doi copii."""


class EmptyOperandsError(EvalError):
    """Minim / maxim peste o lista goala de copii."""


class EndPacketError(EvalError):
    """S-a cerut valoarea santinelei END (END inseamna 'niciun pachet', nu 0)."""


class UnsupportedOperationError(EvalError):
    """Tip de operator necunoscut."""


def _min_or_max(fn: Callable[[List[int]], int]) -> Callable[[List[int]], int]:
    def apply(values: List[int]) -> int:
        if not values:
            raise EmptyOperandsError(f"{fn.__name__}() peste niciun sub-pachet")
        return fn(values)
    return apply


def _compare(fn: Callable[[int, int], bool]) -> Callable[[List[int]], int]:
    def apply(values: List[int]) -> int:
        if len(values) != 2:
            raise MissingOperandsError(f"Comparatia cere exact 2 sub-pachete, am primit {len(values)}")
        return 1 if fn(values[0], values[1]) else 0
    return apply


OPERATIONS: Dict[int, Callable[[List[int]], int]] = {
    0: sum,
    1: math.prod,
    2: _min_or_max(min),
    3: _min_or_max(max),
    5: _compare(operator.gt),
    6: _compare(operator.lt),
    7: _compare(operator.eq),
}


def evaluate(packet: Packet) -> int:
    """
    Evalueaza recursiv un pachet.

    Raises:
        EndPacketError: pachetul (sau un descendent) este END
        MissingOperandsError / EmptyOperandsError: aritate gresita
        UnsupportedOperationError: tip de operator in afara 0-3, 5-7
    """
    if isinstance(packet, End):
        raise EndPacketError("Nu exista rezultat pentru END")

    if isinstance(packet, Literal):
        return packet.value

    operation = OPERATIONS.get(packet.packet_type)
    if operation is None:
        raise UnsupportedOperationError(f"Operatie neimplementata pentru tipul {packet.packet_type}")

    values = [evaluate(child) for child in children_of(packet)]
    return operation(values)
