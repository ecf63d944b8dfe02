"""
Scalar DQN - Source Package
===========================

A Deep Q-Network trained on a hand-rolled scalar autodiff engine.

Modules:
    autograd/ - Scalar nodes, reverse-mode engine, network and RMSProp
    ai/       - Replay buffer, agent and training loop
    env/      - Environment interface and the reference corridor
    utils/    - Logging
"""

__version__ = "1.0.0"
