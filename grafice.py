import os
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from packet_decoding import decode_hex, packet_stats, walk, End
from snailfish_arithmetic import parse_pairs, sum_all_steps


plt.style.use('seaborn-v0_8-muted')

INPUT_FOLDER = os.path.join(os.path.dirname(__file__), "inputs")
DAY_16_INPUT = os.path.join(INPUT_FOLDER, "day_16.txt")
DAY_18_INPUT = os.path.join(INPUT_FOLDER, "day_18.txt")

OUTPUT_FOLDER = os.path.join(os.path.dirname(__file__), "grafice_output")

PACKET_TYPE_NAMES = {
    0: "suma", 1: "produs", 2: "minim", 3: "maxim",
    4: "literal", 5: "mai mare", 6: "mai mic", 7: "egal",
}


def plot_reduction_steps(steps, output_path):
    print(f"Generare grafic reducere snailfish -> {output_path}")

    if not steps:
        print("    [SKIP] Niciun pas de reducere, graficul nu se genereaza")
        return

    x = [s['step'] for s in steps]
    magnitudes = [s['magnitude'] for s in steps]
    explodes = [s['explodes'] for s in steps]
    splits = [s['splits'] for s in steps]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10))
    fig.suptitle('Adunare Snailfish: Fold de la stanga la dreapta',
                 fontsize=16, fontweight='bold', color='#34495e')

    ax1.plot(x, magnitudes, color='#1f77b4', linewidth=1.5, marker='o', label='Magnitudine')
    ax1.fill_between(x, magnitudes, color='#1f77b4', alpha=0.15)
    ax1.set_xlabel('Pas (numar de arbori adunati - 1)', fontsize=11)
    ax1.set_ylabel('Magnitudine', fontsize=11)
    ax1.set_title('Magnitudinea sumei partiale', fontsize=12, fontweight='bold', loc='left')
    ax1.grid(True, linestyle='--', alpha=0.4)
    ax1.spines['top'].set_visible(False)
    ax1.spines['right'].set_visible(False)

    info_text = f'Arbori: {len(steps)}\nMagnitudine finala: {magnitudes[-1]}'
    ax1.text(0.02, 0.95, info_text, transform=ax1.transAxes, fontsize=10,
             verticalalignment='top', bbox=dict(boxstyle='round,pad=0.5', facecolor='#fcf3cf', alpha=0.5))

    # Bare suprapuse: cate explozii si cate split-uri a cerut fiecare adunare
    ax2.bar(x, explodes, color='#e67e22', label='Explode')
    ax2.bar(x, splits, bottom=explodes, color='#27ae60', label='Split')
    ax2.set_xlabel('Pas', fontsize=11)
    ax2.set_ylabel('Numar rescrieri', fontsize=11)
    ax2.set_title('Rescrieri pana la punct fix', fontsize=12, fontweight='bold', loc='left')
    ax2.legend(loc='upper right', fontsize=9)
    ax2.grid(True, linestyle=':', alpha=0.6)

    plt.tight_layout(rect=[0, 0.03, 1, 0.95])

    with PdfPages(output_path) as pdf:
        pdf.savefig(fig, dpi=150)

    plt.close(fig)
    print(f"    Salvat: {output_path}")


def plot_packet_tree(packet, output_path):
    print(f"Generare grafic arbore de pachete -> {output_path}")

    stats = packet_stats(packet)

    # Cate pachete sunt la fiecare nivel de adancime
    per_depth = {}
    for depth, node in walk(packet):
        if not isinstance(node, End):
            per_depth[depth] = per_depth.get(depth, 0) + 1
    depths = sorted(per_depth)

    types = list(stats['packets_by_type'])
    labels = [PACKET_TYPE_NAMES.get(t, str(t)) for t in types]
    counts = [stats['packets_by_type'][t] for t in types]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))
    fig.suptitle(f'Transmisie BITS: {stats["total_packets"]} pachete, {stats["bits_consumed"]} biti',
                 fontsize=14, fontweight='bold', color='#2c3e50')

    ax1.bar(labels, counts, color='#2980b9')
    ax1.set_ylabel('Numar pachete', fontweight='bold')
    ax1.set_title('Pachete pe tip', fontsize=12, fontweight='bold', loc='left')
    ax1.grid(True, axis='y', linestyle=':', alpha=0.6)
    plt.setp(ax1.get_xticklabels(), rotation=30)

    ax2.barh(depths, [per_depth[d] for d in depths], color='#8e44ad')
    ax2.set_xlabel('Numar pachete', fontweight='bold')
    ax2.set_ylabel('Adancime', fontweight='bold')
    ax2.invert_yaxis()
    ax2.set_title('Pachete pe nivel', fontsize=12, fontweight='bold', loc='left')
    ax2.grid(True, axis='x', linestyle=':', alpha=0.6)

    plt.tight_layout(rect=[0, 0.03, 1, 0.93])

    with PdfPages(output_path) as pdf:
        pdf.savefig(fig, dpi=150)

    plt.close(fig)
    print(f"    Salvat: {output_path}")


def main():

    if not os.path.exists(OUTPUT_FOLDER):
        os.makedirs(OUTPUT_FOLDER)
        print(f"\nFolder creat: {OUTPUT_FOLDER}")

    if os.path.exists(DAY_16_INPUT):
        with open(DAY_16_INPUT, 'r', encoding='utf-8') as f:
            packet = decode_hex(f.read())
        plot_packet_tree(packet, os.path.join(OUTPUT_FOLDER, "grafic_pachete.pdf"))

    if os.path.exists(DAY_18_INPUT):
        with open(DAY_18_INPUT, 'r', encoding='utf-8') as f:
            steps = sum_all_steps(parse_pairs(f.read()))
        plot_reduction_steps(steps, os.path.join(OUTPUT_FOLDER, "grafic_reducere_snailfish.pdf"))


if __name__ == "__main__":
    main()
