"""
Evaluate a trained agent (or a random baseline) on the rocket shooter

    python -m rl.evaluate models/ppo/ppo_shooter_final.zip --algo ppo \
        --vec-normalize models/ppo/vec_normalize.pkl --compare-random
"""

import argparse
import time
from typing import Callable, Dict, List, Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from rocket_shooter.entities import Phase
from rocket_shooter.shooter_env import ShooterEnv
from rl.configs.shooter_config import ENV_CONFIG
from rl.train import MultiDiscreteToDiscreteWrapper

ALGOS = {"ppo": PPO, "dqn": DQN}


def summarize(episodes: List[Dict[str, float]], label: str) -> Dict[str, float]:
    """Aggregate per-episode stats and print a short table"""
    returns = np.array([e["return"] for e in episodes])
    scores = np.array([e["score"] for e in episodes])
    summary = {
        "mean_reward": float(returns.mean()),
        "std_reward": float(returns.std()),
        "mean_score": float(scores.mean()),
        "best_score": int(scores.max()),
        "mean_kills": float(np.mean([e["kills"] for e in episodes])),
        "mean_length": float(np.mean([e["steps"] for e in episodes])),
        "survival_rate": float(np.mean([e["survived"] for e in episodes])),
        "episode_rewards": returns.tolist(),
        "episode_scores": scores.tolist(),
    }

    print("\n" + "=" * 50)
    print(f"{label} ({len(episodes)} episodes)")
    print(f"  Return:   {summary['mean_reward']:.2f} +/- {summary['std_reward']:.2f}")
    print(f"  Score:    {summary['mean_score']:.0f} (best {summary['best_score']})")
    print(f"  Kills:    {summary['mean_kills']:.1f}")
    print(f"  Steps:    {summary['mean_length']:.1f}")
    print(f"  Survived: {summary['survival_rate']:.0%}")
    print("=" * 50)
    return summary


def _episode_record(total: float, steps: int, info: dict) -> Dict[str, float]:
    return {
        "return": total,
        "steps": steps,
        "score": info.get("score", 0),
        "kills": info.get("kills", 0),
        "survived": info.get("phase") != Phase.GAME_OVER.value,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
) -> Dict[str, float]:
    """Run a saved model deterministically for `n_episodes`"""
    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = ALGOS[algo].load(model_path)

    base_env = ShooterEnv(render_mode="human" if render else None, **ENV_CONFIG)
    policy_env = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env
    venv = DummyVecEnv([lambda: policy_env])

    if vec_normalize_path:
        venv = VecNormalize.load(vec_normalize_path, venv)
        venv.training = False
        venv.norm_reward = False

    if seed is not None:
        venv.seed(seed)

    episodes = []
    for episode in range(n_episodes):
        obs = venv.reset()
        total, steps, done = 0.0, 0, False
        while not done:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, dones, infos = venv.step(action)
            total += float(reward[0])
            steps += 1
            done = bool(dones[0])
            if render:
                # human speed
                time.sleep(base_env.dt)

        # the vec env has already reset; infos[0] still holds the last step
        record = _episode_record(total, steps, infos[0])
        episodes.append(record)
        print(f"Episode {episode + 1}/{n_episodes}: return {total:.2f}, "
              f"score {record['score']}, kills {record['kills']}, steps {steps}")

    venv.close()
    return summarize(episodes, f"{algo.upper()} agent")


def run_policy(
    policy: Callable[[ShooterEnv, np.ndarray], np.ndarray],
    n_episodes: int = 10,
    seed: Optional[int] = None,
) -> List[Dict[str, float]]:
    """Roll out a plain callable policy on an unwrapped env"""
    env = ShooterEnv(render_mode=None, **ENV_CONFIG)
    if seed is not None:
        env.action_space.seed(seed)
    episodes = []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        total, steps = 0.0, 0
        terminated = truncated = False
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(policy(env, obs))
            total += reward
            steps += 1
        episodes.append(_episode_record(total, steps, info))
    env.close()
    return episodes


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None) -> Dict[str, float]:
    """Uniform random actions, the floor any trained agent should beat"""
    episodes = run_policy(lambda env, obs: env.action_space.sample(), n_episodes, seed)
    return summarize(episodes, "Random policy")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a trained rocket shooter agent")
    parser.add_argument("model_path", type=str, help="Path to the saved model (.zip)")
    parser.add_argument("--algo", type=str, default="ppo", choices=sorted(ALGOS),
                        help="Algorithm the model was trained with (default: ppo)")
    parser.add_argument("--n-episodes", type=int, default=10,
                        help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Run without a window")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None,
                        help="VecNormalize statistics saved next to a PPO model")
    parser.add_argument("--compare-random", action="store_true",
                        help="Also run the random baseline and print the score gap")
    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        baseline = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        gap = results["mean_score"] - baseline["mean_score"]
        print(f"\nScore gain over random: {gap:+.0f}")


if __name__ == "__main__":
    main()
