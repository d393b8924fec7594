"""
Decodarea pachetelor BITS (Buoyancy Interchange Transmission System).

FORMATUL UNUI PACHET:
---------------------
Transmisia vine ca un sir hex; fiecare cifra hex = 4 biti, MSB first.
Orice pachet incepe cu un header de 6 biti:
    VVV TTT        versiunea (3 biti) si tipul (3 biti)

Tip 4 = LITERAL:
    grupuri de 5 biti: 1 bit de continuare + 4 biti de valoare
    1xxxx -> mai urmeaza grupuri, 0xxxx -> ultimul grup
    Ex: D2FE28 = 110 100 10111 11110 00101 000
                 V=6 T=4  0111  1110  0101      -> 011111100101 = 2021

Orice alt tip = OPERATOR:
    1 bit "length type ID"
    0 -> urmeaza 15 biti = lungimea totala (in biti) a sub-pachetelor
    1 -> urmeaza 11 biti = numarul de sub-pachete

Fiecare pachet decodat tine minte cati biti a consumat (header + corp +
toti descendentii), ca parintele sa stie de unde incepe urmatorul frate.

Bitii de padding de la finalul transmisiei (zerourile care completeaza
ultima cifra hex) NU sunt o eroare: daca nu mai incape un header de
6 biti sau daca toti bitii ramasi sunt 0, decoder-ul intoarce santinela END.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple, Union

from BitReader import BitReader
from BitWriter import BitWriter

HEADER_BITS = 6
LITERAL_TYPE = 4
LITERAL_GROUP_BITS = 5
TOTAL_LENGTH_BITS = 15   # length type 0
SUB_PACKET_COUNT_BITS = 11  # length type 1

HEX_DIGITS = "0123456789ABCDEF"


class PacketParseError(ValueError):
    """Transmisia hex nu respecta formatul [0-9A-F]+."""


class PacketDecodeError(ValueError):
    """Header-ul a fost citit, dar corpul pachetului nu poate fi decodat."""


@dataclass(frozen=True)
class Literal:
    version: int
    packet_type: int
    value: int
    bits_consumed: int


@dataclass(frozen=True)
class Operator0:
    # sub-pachetele ocupa exact declared_bit_length biti
    version: int
    packet_type: int
    declared_bit_length: int
    bits_consumed: int
    children: Tuple["Packet", ...]


@dataclass(frozen=True)
class Operator1:
    # urmeaza exact declared_count sub-pachete
    version: int
    packet_type: int
    declared_count: int
    bits_consumed: int
    children: Tuple["Packet", ...]


@dataclass(frozen=True)
class End:
    # Santinela: nu s-a putut decoda niciun pachet (s-au terminat bitii)
    pass


END = End()

Packet = Union[Literal, Operator0, Operator1, End]


def parse_transmission(text: str) -> BitReader:
    """
    Valideaza transmisia hex si o transforma in flux de biti.

    Args:
        text: sirul hex (ex. "D2FE28"), spatiile de la capete sunt ignorate

    Returns:
        BitReader pozitionat la bitul 0
    """
    text = text.strip()
    if not text:
        raise PacketParseError("Transmisia este goala!")

    for i, c in enumerate(text):
        if c not in HEX_DIGITS:
            raise PacketParseError(f"Caracter invalid {c!r} la pozitia {i} (se accepta doar 0-9, A-F)")

    return BitReader.from_hex(text)


class PacketDecoder:
    """
    Decoder recursiv pentru pachete BITS.

    Citeste direct din cursorul BitReader-ului, fara backtracking:
    offset-ul de start e mereu pozitia curenta a cursorului.
    """

    __slots__ = ("_reader",)

    def __init__(self, reader: BitReader):
        self._reader = reader

    def read_packet(self, limit: Optional[int] = None) -> Packet:
        """
        Decodeaza urmatorul pachet de la pozitia curenta.

        Args:
            limit: pozitia (exclusiva) peste care pachetul nu are voie sa treaca;
                   implicit sfarsitul fluxului

        Returns:
            pachetul decodat, sau END daca nu mai incape un header
            ori daca restul bitilor pana la limita sunt zerouri de padding
        """
        # limita nu poate trece de sfarsitul fluxului
        if limit is None or limit > self._reader.bit_length:
            limit = self._reader.bit_length

        start = self._reader.position
        if limit - start < HEADER_BITS or self._only_padding(start, limit):
            return END

        version = self._take(3, limit)
        packet_type = self._take(3, limit)

        if packet_type == LITERAL_TYPE:
            return self._read_literal(start, version, packet_type, limit)
        return self._read_operator(start, version, packet_type, limit)

    def read_packets(self) -> Iterator[Packet]:
        # Pachete consecutive (back-to-back) pana la END
        while True:
            packet = self.read_packet()
            if isinstance(packet, End):
                return
            yield packet

    def _only_padding(self, start: int, limit: int) -> bool:
        # transmisia hex se termina cu zerouri; un rest format doar din zerouri nu e un pachet
        rest = self._reader.read_bits(limit - start)
        self._reader.seek(start)
        return rest == 0

    def _take(self, n: int, limit: int) -> int:
        pos = self._reader.position
        if pos + n > limit:
            raise PacketDecodeError(f"Pachet trunchiat: ceruti {n} biti la offset {pos}, limita {limit}")
        return self._reader.read_bits(n)

    def _read_literal(self, start: int, version: int, packet_type: int, limit: int) -> Literal:
        value = 0
        while True:
            group = self._take(LITERAL_GROUP_BITS, limit)
            value = (value << 4) | (group & 0b1111)
            if not group & 0b10000: # bitul de continuare e 0 -> ultimul grup
                break

        return Literal(version, packet_type, value, self._reader.position - start)

    def _read_operator(self, start: int, version: int, packet_type: int, limit: int) -> Packet:
        length_type = self._take(1, limit)

        if length_type == 0:
            declared_bit_length = self._take(TOTAL_LENGTH_BITS, limit)
            end = self._reader.position + declared_bit_length
            if end > limit:
                raise PacketDecodeError(
                    f"Sub-pachetele declara {declared_bit_length} biti, dar depasesc limita {limit}"
                )

            children = []
            while True:
                child = self.read_packet(end)
                if isinstance(child, End):
                    break
                children.append(child)

            # Lungimea declarata se consuma integral, inclusiv eventualii biti ramasi
            self._reader.seek(end)
            return Operator0(version, packet_type, declared_bit_length, end - start, tuple(children))

        declared_count = self._take(SUB_PACKET_COUNT_BITS, limit)
        children = []
        for i in range(declared_count):
            child = self.read_packet(limit)
            if isinstance(child, End):
                raise PacketDecodeError(
                    f"Operatorul de la offset {start} declara {declared_count} sub-pachete, s-au gasit doar {i}"
                )
            children.append(child)

        return Operator1(version, packet_type, declared_count, self._reader.position - start, tuple(children))


def decode(bits: BitReader, offset: int = 0) -> Tuple[Packet, int]:
    """
    Decodeaza un pachet incepand cu bitul `offset`.

    Cursorul fluxului ramane imediat dupa pachet, deci un apel urmator cu
    offset + bits_consumed citeste fratele urmator.

    Returns:
        (pachet, biti consumati); (END, 0) daca nu mai incape un header
    """
    bits.seek(offset)
    packet = PacketDecoder(bits).read_packet()
    if isinstance(packet, End):
        return packet, 0
    return packet, packet.bits_consumed


def decode_hex(text: str) -> Packet:
    # Pachetul exterior al unei transmisii (padding-ul de la final e ignorat)
    packet, _ = decode(parse_transmission(text))
    return packet


def children_of(packet: Packet) -> Tuple[Packet, ...]:
    if isinstance(packet, (Operator0, Operator1)):
        return packet.children
    return ()


def version_sum(packet: Packet) -> int:
    # END contribuie cu 0 (toleram padding-ul de la final)
    if isinstance(packet, End):
        return 0
    return packet.version + sum(version_sum(child) for child in children_of(packet))


def walk(packet: Packet, depth: int = 0) -> Iterator[Tuple[int, Packet]]:
    # Parcurgere pre-order: (adancime, pachet)
    yield depth, packet
    for child in children_of(packet):
        yield from walk(child, depth + 1)


def packet_stats(packet: Packet) -> Dict:
    """Statistici despre arborele de pachete (folosite la grafice)."""
    by_type: Dict[int, int] = {}
    total = 0
    max_depth = 0

    for depth, node in walk(packet):
        if isinstance(node, End):
            continue
        total += 1
        max_depth = max(max_depth, depth)
        by_type[node.packet_type] = by_type.get(node.packet_type, 0) + 1

    return {
        "total_packets": total,
        "literals": by_type.get(LITERAL_TYPE, 0),
        "operators": total - by_type.get(LITERAL_TYPE, 0),
        "packets_by_type": dict(sorted(by_type.items())),
        "max_depth": max_depth,
        "bits_consumed": 0 if isinstance(packet, End) else packet.bits_consumed,
        "version_sum": version_sum(packet),
    }


class PacketEncoder:
    """
    Encoder pentru pachete BITS (inversul lui PacketDecoder).

    Campurile de lungime / numar de sub-pachete se recalculeaza din copii,
    iar literalii se scriu pe numarul minim de grupuri.
    """

    __slots__ = ("_writer",)

    def __init__(self, writer: BitWriter):
        self._writer = writer

    def write_packet(self, packet: Packet) -> None:
        if isinstance(packet, End):
            raise ValueError("END nu este un pachet si nu poate fi codat!")

        if isinstance(packet, Literal):
            if packet.packet_type != LITERAL_TYPE:
                raise ValueError(f"Un literal trebuie sa aiba tipul {LITERAL_TYPE}, nu {packet.packet_type}")
        elif packet.packet_type == LITERAL_TYPE:
            raise ValueError(f"Tipul {LITERAL_TYPE} este rezervat literalilor")

        self._writer.write_bits(packet.version, 3)
        self._writer.write_bits(packet.packet_type, 3)

        if isinstance(packet, Literal):
            self._write_literal_value(packet.value)
        elif isinstance(packet, Operator0):
            # Codam copiii separat ca sa aflam lungimea lor in biti
            body = BitWriter()
            child_encoder = PacketEncoder(body)
            for child in packet.children:
                child_encoder.write_packet(child)

            self._writer.write_bit(0)
            self._writer.write_bits(body.bit_length(), TOTAL_LENGTH_BITS)
            self._writer.extend(body)
        else:
            self._writer.write_bit(1)
            self._writer.write_bits(len(packet.children), SUB_PACKET_COUNT_BITS)
            for child in packet.children:
                self.write_packet(child)

    def _write_literal_value(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Literalii sunt fara semn. Am primit: {value}")

        # Impartim valoarea in grupuri de cate 4 biti, cel mai semnificativ primul
        nibbles = []
        while True:
            nibbles.append(value & 0b1111)
            value >>= 4
            if value == 0:
                break
        nibbles.reverse()

        for i, nibble in enumerate(nibbles):
            last = i == len(nibbles) - 1
            self._writer.write_bit(0 if last else 1)
            self._writer.write_bits(nibble, 4)


def encode_packet(packet: Packet) -> str:
    # Pachetul codat ca sir hex (completat cu zerouri pana la un byte intreg)
    writer = BitWriter()
    PacketEncoder(writer).write_packet(packet)
    return writer.to_hex()
