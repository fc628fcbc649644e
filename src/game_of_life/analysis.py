"""
Performance analysis of benchmark results.

Reads the CSV written by `game-of-life benchmark` and draws a dashboard:
time per generation by grid size, throughput, and speedup over the
sequential dense scan.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.gridspec import GridSpec

from .errors import GameOfLifeError

logger = logging.getLogger(__name__)

plt.style.use('seaborn-v0_8-darkgrid')
sns.set_palette("husl")
COLORS = {
    'naive': '#2E86AB',
    'hash': '#06A77D',
    'parallel': '#C73E1D',
}
LABELS = {
    'naive': 'Sequential dense',
    'hash': 'Sparse',
    'parallel': 'Parallel dense',
}

TITLE_FONT = {'family': 'sans-serif', 'weight': 'bold', 'size': 14}
LABEL_FONT = {'family': 'sans-serif', 'weight': 'normal', 'size': 11}

REQUIRED_COLUMNS = {'implementation', 'grid_size', 'generations', 'total_time_ms'}


def load_results(csv_path):
    """Load a benchmark CSV and fill in derived columns"""
    df = pd.read_csv(csv_path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise GameOfLifeError(f"{csv_path} is missing columns: {', '.join(sorted(missing))}")

    if 'time_per_generation_ms' not in df.columns:
        df['time_per_generation_ms'] = df['total_time_ms'] / df['generations']
    if 'cells_per_second_million' not in df.columns:
        df['cells_per_second_million'] = (
            df['grid_size'] ** 2 * df['generations'] / df['total_time_ms'] / 1000
        )
    df = calculate_speedups(df)
    logger.info("Loaded %d benchmark records from %s", len(df), csv_path)
    return df


def calculate_speedups(df):
    """Speedup of every run over the sequential dense run of the same size"""
    df = df.copy()
    baseline = (df[df['implementation'] == 'naive']
                .groupby('grid_size')['total_time_ms'].min())
    df['speedup'] = df['grid_size'].map(baseline) / df['total_time_ms']
    return df


def create_dashboard(df):
    """Figure with timing, throughput and speedup panels"""
    fig = plt.figure(figsize=(16, 10))
    fig.patch.set_facecolor('white')
    gs = GridSpec(2, 2, figure=fig, hspace=0.35, wspace=0.25)

    fig.suptitle("Game of Life: Update Strategy Performance",
                 fontsize=18, fontweight='bold', color=COLORS['naive'], y=0.98)

    implementations = [i for i in LABELS if i in set(df['implementation'])]
    grid_sizes = sorted(df['grid_size'].unique())

    # PANEL 1: time per generation
    ax1 = fig.add_subplot(gs[0, 0])
    for impl in implementations:
        data = df[df['implementation'] == impl].sort_values('grid_size')
        ax1.plot(data['grid_size'], data['time_per_generation_ms'],
                 marker='o', linewidth=2.5, markersize=8,
                 label=LABELS[impl], color=COLORS[impl],
                 markeredgecolor='white', markeredgewidth=1.5)
    ax1.set_xscale('log', base=2)
    ax1.set_yscale('log')
    ax1.set_xticks(grid_sizes)
    ax1.set_xticklabels([f'{s}×{s}' for s in grid_sizes])
    ax1.set_xlabel('Grid size', **LABEL_FONT)
    ax1.set_ylabel('Time per generation (ms)', **LABEL_FONT)
    ax1.set_title('Time per Generation', **TITLE_FONT, pad=12)
    ax1.legend(loc='upper left', framealpha=0.95)

    # PANEL 2: throughput
    ax2 = fig.add_subplot(gs[0, 1])
    sns.barplot(data=df, x='grid_size', y='cells_per_second_million',
                hue='implementation', hue_order=implementations,
                palette=[COLORS[i] for i in implementations], ax=ax2)
    ax2.set_xlabel('Grid size', **LABEL_FONT)
    ax2.set_ylabel('Throughput (M cells/s)', **LABEL_FONT)
    ax2.set_title('Throughput', **TITLE_FONT, pad=12)
    handles, _ = ax2.get_legend_handles_labels()
    ax2.legend(handles, [LABELS[i] for i in implementations], framealpha=0.95)

    # PANEL 3: speedup over sequential dense
    ax3 = fig.add_subplot(gs[1, :])
    width = 0.8 / max(len(implementations), 1)
    x = np.arange(len(grid_sizes))
    for idx, impl in enumerate(implementations):
        data = df[df['implementation'] == impl].set_index('grid_size').reindex(grid_sizes)
        bars = ax3.bar(x + idx * width - 0.4 + width / 2, data['speedup'].fillna(0),
                       width, label=LABELS[impl], color=COLORS[impl], alpha=0.85,
                       edgecolor='black', linewidth=0.8)
        for bar, value in zip(bars, data['speedup']):
            if pd.notna(value):
                ax3.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                         f'{value:.1f}×', ha='center', va='bottom', fontsize=9)
    ax3.axhline(y=1, color='black', linestyle='--', linewidth=1.5, alpha=0.6)
    ax3.set_xticks(x)
    ax3.set_xticklabels([f'{s}×{s}' for s in grid_sizes])
    ax3.set_xlabel('Grid size', **LABEL_FONT)
    ax3.set_ylabel('Speedup vs sequential dense', **LABEL_FONT)
    ax3.set_title('Speedup', **TITLE_FONT, pad=12)
    ax3.legend(framealpha=0.95)

    return fig


def print_summary(df):
    print("\n" + "=" * 60)
    print("BEST IMPLEMENTATION FOR EACH GRID SIZE")
    print("=" * 60)
    for size in sorted(df['grid_size'].unique()):
        data = df[df['grid_size'] == size]
        best = data.loc[data['total_time_ms'].idxmin()]
        speedup = best['speedup']
        speedup_text = f"{speedup:.2f}x" if pd.notna(speedup) else "N/A"
        print(f"Grid {size:>4}x{size:<4}: {LABELS.get(best['implementation'], best['implementation']):<18} "
              f"({best['time_per_generation_ms']:.4f} ms/gen, speedup {speedup_text})")
    print("=" * 60)


def analyze(csv_path, output_path=None, show=False):
    """Load results, save the dashboard and print the summary"""
    df = load_results(csv_path)
    if df.empty:
        raise GameOfLifeError(f"{csv_path} holds no benchmark records")

    if output_path is None:
        output_path = Path(csv_path).with_name('performance_dashboard.png')
    output_path = Path(output_path)

    fig = create_dashboard(df)
    fig.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    print(f"Saved: {output_path}")
    print_summary(df)

    if show:
        plt.show()
    plt.close(fig)
    return output_path
