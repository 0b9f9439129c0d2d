"""
Training configuration for the rocket shooter environment
Reward shaping presets and algorithm hyperparameters
"""

# Game tunables passed through to GameConfig (empty = the arcade defaults)
GAME_CONFIG = {
    # "speed_increase_interval": 10.0,
    # "initial_ammo": 20,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "dt": 1/30,
    "max_steps": 3600,  # 120 seconds at 30 steps/s
    "k_obstacles": 4,
    "k_enemies": 3,
    "m_bullets": 4,
    "max_ammo_obs": 50,
    "game_config": GAME_CONFIG,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# BASELINE: survive, shoot what chases you, grab supplies
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced survival and combat",
    "R_SURVIVE": 0.01,   # Per tick alive
    "R_KILL": 1.0,       # Enemy shot down
    "R_PICKUP": 0.5,     # Crate or health pack collected
    "R_DAMAGE": 0.02,    # Per health point lost
    "R_SHOT": 0.005,     # Per shot fired (encourage efficiency)
    "R_DEATH": 5.0,      # Run ended
}

# SURVIVAL: dodge first
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - heavy damage/death penalties",
    "R_SURVIVE": 0.02,
    "R_KILL": 0.3,
    "R_PICKUP": 0.5,
    "R_DAMAGE": 0.06,
    "R_SHOT": 0.01,
    "R_DEATH": 10.0,
}

# AGGRESSIVE: score chasing
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize kills and pickups - accept risk",
    "R_SURVIVE": 0.005,
    "R_KILL": 2.0,
    "R_PICKUP": 1.0,
    "R_DAMAGE": 0.01,
    "R_SHOT": 0.001,
    "R_DEATH": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
