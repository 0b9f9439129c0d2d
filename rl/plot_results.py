"""
Plotting script for training results.
Generates learning curves from the MetricsCallback CSV files.
"""

import os
import argparse
from typing import Dict, Optional

import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50) -> str:
    """Plot reward, score, kills and survival for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")
    timesteps = df["timestep"].values

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "score", "Final Score", "orange"),
        (axes[1, 0], "kills", "Enemies Killed", "red"),
        (axes[1, 1], "survived", "Survival Rate", "green"),
    ]
    for ax, column, label, color in panels:
        if column not in df.columns:
            ax.set_visible(False)
            continue
        smoothed = smooth(df[column].values, window)
        ax.plot(timesteps[:len(smoothed)], smoothed, linewidth=2, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)
    if "survived" in df.columns:
        axes[1, 1].set_ylim(0, 1.1)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str, window: int = 50) -> str:
    """Overlay smoothed scores of every algorithm."""
    fig, ax = plt.subplots(figsize=(10, 6))
    for algo, df in data.items():
        smoothed = smooth(df["score"].values, window)
        ax.plot(df["timestep"].values[:len(smoothed)], smoothed, linewidth=2, label=algo.upper())
    ax.set_xlabel("Timesteps")
    ax.set_ylabel("Final Score")
    ax.set_title("Score Comparison")
    ax.legend()
    ax.grid(True, alpha=0.3)

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "score_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved comparison plot to {save_path}")
    return save_path


def main():
    parser = argparse.ArgumentParser(description="Plot training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory with metrics CSVs")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Where to write PNGs")
    parser.add_argument("--algos", nargs="+", default=["ppo", "dqn"], help="Algorithms to plot")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window (episodes)")

    args = parser.parse_args()

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is None or df.empty:
            print(f"No metrics found for {algo} in {args.log_dir}")
            continue
        data[algo] = df
        plot_learning_curve(df, algo, args.output_dir, args.window)

    if len(data) > 1:
        plot_comparison(data, args.output_dir, args.window)


if __name__ == "__main__":
    main()
