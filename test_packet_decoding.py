"""
Teste pentru decodarea, codarea si evaluarea pachetelor BITS.
Exemplele hex sunt cele din enuntul Day 16.
"""

from BitReader import BitReader
from BitWriter import BitWriter
from packet_decoding import (
    END,
    Literal,
    Operator0,
    Operator1,
    PacketDecodeError,
    PacketDecoder,
    PacketEncoder,
    PacketParseError,
    decode,
    decode_hex,
    encode_packet,
    packet_stats,
    parse_transmission,
    version_sum,
    walk,
)
from packet_evaluation import (
    EmptyOperandsError,
    EndPacketError,
    EvalError,
    MissingOperandsError,
    UnsupportedOperationError,
    evaluate,
)

LITERAL_HEX = "D2FE28"
OPERATOR_0_HEX = "38006F45291200"
OPERATOR_1_HEX = "EE00D40C823060"

VERSION_SUM_EXAMPLES = [
    ("8A004A801A8002F478", 16),
    ("620080001611562C8802118E34", 12),
    ("C0015000016115A2E0802F182340", 23),
    ("A0016C880162017C3686B18A3D4780", 31),
]

EVALUATION_EXAMPLES = [
    ("C200B40A82", 3),
    ("04005AC33890", 54),
    ("880086C3E88112", 7),
    ("CE00C43D881120", 9),
    ("D8005AC2A8F0", 1),
    ("F600BC2D8F", 0),
    ("9C005AC2F8F0", 0),
    ("9C0141080250320F1802104A08", 1),
]


def test_decode_literal():
    """Test: D2FE28 -> literal 2021"""
    print("Test 1: Literal packet...")

    packet, consumed = decode(parse_transmission(LITERAL_HEX))

    assert packet == Literal(version=6, packet_type=4, value=2021, bits_consumed=21)
    assert consumed == 21, "Cei 3 biti de padding nu fac parte din pachet"

    print("[OK] Literal packet test passed!")


def test_decode_operator_length_type_0():
    """Test: lungimea totala a sub-pachetelor in biti"""
    print("\nTest 2: Operator, length type 0...")

    packet = decode_hex(OPERATOR_0_HEX)

    assert packet == Operator0(
        version=1,
        packet_type=6,
        declared_bit_length=27,
        bits_consumed=49,
        children=(
            Literal(version=6, packet_type=4, value=10, bits_consumed=11),
            Literal(version=2, packet_type=4, value=20, bits_consumed=16),
        ),
    )

    print("[OK] Operator length type 0 test passed!")


def test_decode_operator_length_type_1():
    """Test: numarul de sub-pachete"""
    print("\nTest 3: Operator, length type 1...")

    packet = decode_hex(OPERATOR_1_HEX)

    assert packet == Operator1(
        version=7,
        packet_type=3,
        declared_count=3,
        bits_consumed=51,
        children=(
            Literal(version=2, packet_type=4, value=1, bits_consumed=11),
            Literal(version=4, packet_type=4, value=2, bits_consumed=11),
            Literal(version=1, packet_type=4, value=3, bits_consumed=11),
        ),
    )

    print("[OK] Operator length type 1 test passed!")


def test_decode_nested_operators():
    """Test: operator -> operator -> operator -> literal"""
    print("\nTest 4: Nested operators...")

    outer = decode_hex("8A004A801A8002F478")
    assert isinstance(outer, Operator1)
    assert (outer.version, outer.declared_count) == (4, 1)

    middle = outer.children[0]
    assert isinstance(middle, Operator1)
    assert (middle.version, middle.declared_count) == (1, 1)

    inner = middle.children[0]
    assert isinstance(inner, Operator0)
    assert inner.version == 5
    assert len(inner.children) == 1

    leaf = inner.children[0]
    assert isinstance(leaf, Literal)
    assert leaf.version == 6

    mixed = decode_hex("620080001611562C8802118E34")
    assert isinstance(mixed, Operator1)
    assert (mixed.version, mixed.declared_count) == (3, 2)
    left, right = mixed.children
    assert isinstance(left, Operator0)
    assert [c.version for c in left.children] == [0, 5]
    assert isinstance(right, Operator1)
    assert [c.version for c in right.children] == [0, 3]

    print("[OK] Nested operators test passed!")


def test_version_sum():
    """Test: suma versiunilor pentru exemplele din enunt"""
    print("\nTest 5: Version sum...")

    for text, expected in VERSION_SUM_EXAMPLES:
        result = version_sum(decode_hex(text))
        assert result == expected, f"{text}: expected {expected}, got {result}"

    assert version_sum(END) == 0

    print("[OK] Version sum test passed!")


def test_bits_consumed_line_up():
    """Test: pachete consecutive; bits_consumed indica exact inceputul urmatorului"""
    print("\nTest 6: Back-to-back bit accounting...")

    packets = [decode_hex(LITERAL_HEX), decode_hex(OPERATOR_0_HEX), decode_hex(OPERATOR_1_HEX)]

    writer = BitWriter()
    encoder = PacketEncoder(writer)
    for packet in packets:
        encoder.write_packet(packet)
    assert writer.bit_length() == 21 + 49 + 51

    bits = BitReader(writer.to_bytes(), writer.bit_length())
    offset = 0
    for expected in packets:
        packet, consumed = decode(bits, offset)
        assert packet == expected
        assert bits.position == offset + consumed
        offset += consumed

    packet, consumed = decode(bits, offset)
    assert packet is END and consumed == 0

    bits.seek(0)
    assert list(PacketDecoder(bits).read_packets()) == packets

    print("[OK] Back-to-back bit accounting test passed!")


def test_encode_packet():
    """Test: codarea reproduce transmisiile originale"""
    print("\nTest 7: Packet encoding...")

    for text in (LITERAL_HEX, OPERATOR_0_HEX, OPERATOR_1_HEX):
        assert encode_packet(decode_hex(text)) == text

    try:
        encode_packet(END)
        assert False, "Ar trebui sa arunce ValueError"
    except ValueError:
        pass

    try:
        encode_packet(Literal(version=0, packet_type=0, value=1, bits_consumed=0))
        assert False, "Ar trebui sa arunce ValueError"
    except ValueError:
        pass

    print("[OK] Packet encoding test passed!")


def test_end_on_padding():
    """Test: mai putin de 6 biti sau doar zerouri la final -> END, nu eroare"""
    print("\nTest 8: End sentinel...")

    packet, consumed = decode(BitReader.from_hex("F"))
    assert packet is END and consumed == 0

    bits = parse_transmission(LITERAL_HEX)
    packet, consumed = decode(bits, 21)
    assert packet is END and consumed == 0

    # 7 zerouri dupa pachetul exterior: destui biti pentru un header, dar doar padding
    for text, expected_bits in ((OPERATOR_0_HEX, 49), ("A0016C880162017C3686B18A3D4780", 113)):
        bits = parse_transmission(text)
        outer, consumed = decode(bits, 0)
        assert consumed == expected_bits
        assert bits.bit_length - consumed >= 6

        packet, consumed_after = decode(bits, consumed)
        assert packet is END and consumed_after == 0

        assert list(PacketDecoder(parse_transmission(text)).read_packets()) == [outer]

    packet, consumed = decode(parse_transmission("00"))
    assert packet is END and consumed == 0

    # o limita dincolo de sfarsitul fluxului se reduce la lungimea fluxului
    packet = PacketDecoder(parse_transmission(LITERAL_HEX)).read_packet(limit=1000)
    assert packet == decode_hex(LITERAL_HEX)

    try:
        PacketDecoder(BitReader(bytes.fromhex(LITERAL_HEX), 16)).read_packet(limit=1000)
        assert False, "Ar trebui sa arunce PacketDecodeError"
    except PacketDecodeError:
        pass

    print("[OK] End sentinel test passed!")


def test_truncated_packets():
    """Test: header citit, dar corpul nu incape -> PacketDecodeError"""
    print("\nTest 9: Truncated packets...")

    # operator tip 1 fara loc pentru campul de 11 biti (000 000 1 0)
    try:
        decode_hex("02")
        assert False, "Ar trebui sa arunce PacketDecodeError"
    except PacketDecodeError:
        pass

    # literal al carui grup final lipseste (doar primii 16 biti din D2FE28)
    try:
        decode(BitReader(bytes.fromhex(LITERAL_HEX), 16), 0)
        assert False, "Ar trebui sa arunce PacketDecodeError"
    except PacketDecodeError:
        pass

    # operator tip 1 care declara 3 sub-pachete, dar al treilea lipseste
    writer = BitWriter()
    PacketEncoder(writer).write_packet(decode_hex(OPERATOR_1_HEX))
    try:
        decode(BitReader(writer.to_bytes(), writer.bit_length() - 11), 0)
        assert False, "Ar trebui sa arunce PacketDecodeError"
    except PacketDecodeError:
        pass

    # operator tip 0 a carui lungime declarata depaseste fluxul
    writer = BitWriter()
    PacketEncoder(writer).write_packet(decode_hex(OPERATOR_0_HEX))
    try:
        decode(BitReader(writer.to_bytes(), writer.bit_length() - 5), 0)
        assert False, "Ar trebui sa arunce PacketDecodeError"
    except PacketDecodeError:
        pass

    print("[OK] Truncated packets test passed!")


def test_parse_errors():
    """Test: transmisii hex invalide"""
    print("\nTest 10: Parse errors...")

    for text in ("", "   ", "D2FE2G", "d2fe28", "D2 FE28"):
        try:
            parse_transmission(text)
            assert False, f"{text!r} ar trebui sa arunce PacketParseError"
        except PacketParseError:
            pass

    assert parse_transmission(" D2FE28\n").bit_length == 24

    print("[OK] Parse errors test passed!")


def test_evaluate_examples():
    """Test: valorile expresiilor din enunt"""
    print("\nTest 11: Evaluation...")

    for text, expected in EVALUATION_EXAMPLES:
        result = evaluate(decode_hex(text))
        assert result == expected, f"{text}: expected {expected}, got {result}"

    assert evaluate(decode_hex(LITERAL_HEX)) == 2021
    assert evaluate(decode_hex(OPERATOR_1_HEX)) == 3  # maxim(1, 2, 3)

    print("[OK] Evaluation test passed!")


def test_evaluate_errors():
    """Test: aritate gresita, END, tip necunoscut"""
    print("\nTest 12: Evaluation errors...")

    one = Literal(version=0, packet_type=4, value=1, bits_consumed=11)
    two = Literal(version=0, packet_type=4, value=2, bits_consumed=11)

    cases = [
        (Operator1(0, 5, 1, 29, (one,)), MissingOperandsError),
        (Operator1(0, 7, 3, 51, (one, two, one)), MissingOperandsError),
        (Operator0(0, 2, 0, 22, ()), EmptyOperandsError),
        (Operator0(0, 3, 0, 22, ()), EmptyOperandsError),
        (END, EndPacketError),
        (Operator1(0, 0, 1, 18, (END,)), EndPacketError),
        (Operator1(0, 4, 1, 29, (one,)), UnsupportedOperationError),
    ]

    for packet, error in cases:
        try:
            evaluate(packet)
            assert False, f"{packet} ar trebui sa arunce {error.__name__}"
        except error as e:
            assert isinstance(e, EvalError)
            assert isinstance(e, ValueError)

    # suma / produsul peste niciun copil sunt elementele neutre
    assert evaluate(Operator0(0, 0, 0, 22, ())) == 0
    assert evaluate(Operator0(0, 1, 0, 22, ())) == 1

    print("[OK] Evaluation errors test passed!")


def test_walk_and_stats():
    """Test: parcurgere pre-order si statistici"""
    print("\nTest 13: Walk and stats...")

    packet = decode_hex(OPERATOR_1_HEX)
    assert [(d, p.version) for d, p in walk(packet)] == [(0, 7), (1, 2), (1, 4), (1, 1)]

    stats = packet_stats(packet)
    assert stats["total_packets"] == 4
    assert stats["literals"] == 3
    assert stats["operators"] == 1
    assert stats["packets_by_type"] == {3: 1, 4: 3}
    assert stats["max_depth"] == 1
    assert stats["bits_consumed"] == 51
    assert stats["version_sum"] == 14

    nested = packet_stats(decode_hex("8A004A801A8002F478"))
    assert nested["max_depth"] == 3
    assert nested["version_sum"] == 16

    print("[OK] Walk and stats test passed!")


def run_all_tests():
    """Ruleaza toate testele"""
    print("=" * 60)
    print("RULARE TESTE Packet Decoder")
    print("=" * 60)

    tests = [
        test_decode_literal,
        test_decode_operator_length_type_0,
        test_decode_operator_length_type_1,
        test_decode_nested_operators,
        test_version_sum,
        test_bits_consumed_line_up,
        test_encode_packet,
        test_end_on_padding,
        test_truncated_packets,
        test_parse_errors,
        test_evaluate_examples,
        test_evaluate_errors,
        test_walk_and_stats,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except AssertionError as e:
            print(f"[FAIL] {test.__name__} FAILED: {e}")
            failed += 1
        except Exception as e:
            print(f"[FAIL] {test.__name__} ERROR: {e}")
            failed += 1

    print("\n" + "=" * 60)
    print(f"REZULTATE: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    exit(0 if success else 1)
