"""State encoding, Q-learning agent and training loop."""
