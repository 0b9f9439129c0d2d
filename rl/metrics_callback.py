"""
Custom callback for tracking game metrics during training.
Records: final score, enemies killed, pickups collected, damage taken.
"""

import os
import csv
from typing import Dict, List, Any, Optional
from stable_baselines3.common.callbacks import BaseCallback

CSV_FIELDS = [
    "timestep", "episode", "reward", "length",
    "score", "kills", "pickups", "damage", "survived",
]


class MetricsCallback(BaseCallback):
    """
    Callback to track and log game metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_kills: List[int] = []
        self.episode_pickups: List[int] = []
        self.episode_damage: List[int] = []

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow(CSV_FIELDS)
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor adds "episode" to the info of the final step
            if not (done and "episode" in info):
                continue
            ep_info = info["episode"]
            self.record_episode(
                reward=float(ep_info["r"]),
                length=int(ep_info["l"]),
                info=info,
            )

        return True

    def record_episode(self, reward: float, length: int, info: Dict[str, Any]):
        score = int(info.get("score", 0))
        kills = int(info.get("kills", 0))
        pickups = int(info.get("pickups_collected", 0))
        damage = int(info.get("damage_taken", 0))
        # truncated runs end still active
        survived = 0.0 if info.get("phase") == "game_over" else 1.0

        self.episode_rewards.append(reward)
        self.episode_lengths.append(length)
        self.episode_scores.append(score)
        self.episode_kills.append(kills)
        self.episode_pickups.append(pickups)
        self.episode_damage.append(damage)

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps, len(self.episode_rewards), reward, length,
                score, kills, pickups, damage, survived,
            ])
            self.csv_file.flush()

        if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
            avg_reward = sum(self.episode_rewards[-10:]) / 10
            avg_score = sum(self.episode_scores[-10:]) / 10
            print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                  f"Timestep {self.num_timesteps}, "
                  f"Avg Reward (10 ep): {avg_reward:.2f}, "
                  f"Avg Score (10 ep): {avg_score:.0f}")

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            self.csv_file = None
            self.csv_writer = None
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        import numpy as np
        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "best_score": int(np.max(self.episode_scores)),
            "mean_kills": np.mean(self.episode_kills),
        }
