"""
Script principal: rezolva cele doua puzzle-uri pe intrarile din 'inputs'.

Proceseaza:
1. Day 16: transmisie BITS (hex) -> suma versiunilor + valoarea expresiei
2. Day 18: lista de numere snailfish -> magnitudinea sumei + cea mai mare
   magnitudine a sumei a doi arbori

Fiecare zi e independenta: o eroare la o zi nu o opreste pe cealalta.
"""

import os
import time

from packet_decoding import PacketDecodeError, PacketParseError, decode_hex, packet_stats
from packet_evaluation import EvalError, evaluate
from snailfish_arithmetic import PairParseError, max_pairwise_sum_magnitude, parse_pairs, sum_all

# Cai catre fisierele de intrare
INPUT_FOLDER = os.path.join(os.path.dirname(__file__), "inputs")
DAY_16_INPUT = os.path.join(INPUT_FOLDER, "day_16.txt")
DAY_18_INPUT = os.path.join(INPUT_FOLDER, "day_18.txt")

# Cate procese pentru cautarea perechii maxime (None = serial)
PAIR_SEARCH_WORKERS = os.cpu_count()


def read_input(filepath: str) -> str:
    with open(filepath, 'r', encoding='utf-8') as f:
        return f.read()


def solve_day_16(filepath: str):
    """Rezolva Day 16 (Packet Decoder). Intoarce (suma versiunilor, valoarea) sau None."""
    print("=" * 70)
    print("DAY 16: Packet Decoder")
    print("=" * 70)

    if not os.path.exists(filepath):
        print(f"[EROARE] Fisierul nu exista: {filepath}")
        return None

    # 1. Decodare
    print("\n[1] Decodare transmisie...")
    t_start = time.perf_counter()
    try:
        packet = decode_hex(read_input(filepath))
    except (PacketParseError, PacketDecodeError) as e:
        print(f"[EROARE] Transmisie invalida: {e}")
        return None
    t_decode = time.perf_counter() - t_start

    stats = packet_stats(packet)
    print(f"    Timp decodare: {t_decode*1000:.2f} ms")
    print(f"    Pachete: {stats['total_packets']} ({stats['literals']} literali, {stats['operators']} operatori)")
    print(f"    Adancime maxima: {stats['max_depth']}")
    print(f"    Biti consumati: {stats['bits_consumed']}")

    # 2. Solutii
    print("\n[2] Solutii:")
    sol_1 = stats["version_sum"]
    print(f"    Solution 1: {sol_1}")

    try:
        sol_2 = evaluate(packet)
    except EvalError as e:
        print(f"[EROARE] Evaluare esuata: {e}")
        return None
    print(f"    Solution 2: {sol_2}")

    return sol_1, sol_2


def solve_day_18(filepath: str):
    """Rezolva Day 18 (Snailfish). Intoarce (magnitudinea sumei, maximul pe perechi) sau None."""
    print("\n" + "=" * 70)
    print("DAY 18: Snailfish")
    print("=" * 70)

    if not os.path.exists(filepath):
        print(f"[EROARE] Fisierul nu exista: {filepath}")
        return None

    # 1. Parsare
    print("\n[1] Parsare numere snailfish...")
    try:
        trees = parse_pairs(read_input(filepath))
    except PairParseError as e:
        print(f"[EROARE] Intrare invalida: {e}")
        return None
    print(f"    Arbori: {len(trees)}")

    # 2. Solutii
    print("\n[2] Solutii:")
    t_start = time.perf_counter()
    sol_1 = sum_all(trees)
    t_sum = time.perf_counter() - t_start
    print(f"    Solution 1: {sol_1}  ({t_sum*1000:.2f} ms)")

    t_start = time.perf_counter()
    sol_2 = max_pairwise_sum_magnitude(trees, workers=PAIR_SEARCH_WORKERS)
    t_pairs = time.perf_counter() - t_start
    print(f"    Solution 2: {sol_2}  ({t_pairs*1000:.2f} ms, {len(trees) * (len(trees) - 1)} perechi)")

    return sol_1, sol_2


def main():
    print("\n" + "#" * 70)
    print("#" + " " * 22 + "ADVENT OF CODE 2021" + " " * 27 + "#")
    print("#" * 70 + "\n")

    day_16 = solve_day_16(DAY_16_INPUT)
    day_18 = solve_day_18(DAY_18_INPUT)

    print("\n" + "=" * 70)
    print(f"{'Zi':<10} {'Solution 1':<20} {'Solution 2':<20}")
    print("-" * 50)
    for name, result in (("Day 16", day_16), ("Day 18", day_18)):
        if result:
            print(f"{name:<10} {str(result[0]):<20} {str(result[1]):<20}")
        else:
            print(f"{name:<10} {'N/A':<20} {'N/A':<20}")
    print("=" * 70)


if __name__ == "__main__":
    main()
