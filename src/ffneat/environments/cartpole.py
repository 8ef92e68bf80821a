"""
CartPole Problem Environment for NEAT

The CartPole Problem:
    The agent controls a cart that moves along a frictionless track. A pole is attached
    to the cart via an un-actuated joint. The agent must balance the pole by moving the
    cart left or right.

    State Space (4 continuous values):
        - Cart position: [-2.4, 2.4]
        - Cart velocity: [-∞, ∞]
        - Pole angle: [-0.209, 0.209] radians (~12 degrees)
        - Pole angular velocity: [-∞, ∞]

    Action Space (2 discrete actions):
        0 - Push cart to the left
        1 - Push cart to the right

Fitness Function:
    Fitness = average total reward over a number of episodes, i.e. the
    average number of time steps the pole remained balanced.

Classes:
    CartPoleEnvironment: The CartPole-v1 balancing task from Gymnasium
"""

import gymnasium as gym    # type: ignore
import numpy as np
from statistics import mean

from ffneat.environments.base import Agent, Environment

class CartPoleEnvironment(Environment):
    """
    The CartPole-v1 balancing task.

    The action taken at each step is the index of the output neuron with the
    highest activation. An agent counts as a solution when it keeps the pole
    balanced for 'max_steps' steps in every episode.
    """

    def __init__(self, num_episodes: int = 1, max_steps: int = 500, seed: int | None = None):
        """
        Parameters:
            num_episodes: number of episodes an agent is evaluated on
            max_steps:    maximum length of an episode
            seed:         if given, episode 'n' is reset with seed 'seed + n', making evaluation deterministic
        """
        self.num_episodes = num_episodes
        self.max_steps    = max_steps
        self.seed         = seed
        self.env          = gym.make("CartPole-v1", max_episode_steps=max_steps)

    def state_size(self) -> int:
        return self.env.observation_space.shape[0]

    def action_size(self) -> int:
        return int(self.env.action_space.n)

    def _run_episodes(self, agent: Agent) -> list[float]:
        """
        Run 'num_episodes' episodes and return the total reward of each.
        """
        total_rewards = []
        for n in range(self.num_episodes):

            # Reset environment before starting new episode
            observation, _ = self.env.reset(seed=None if self.seed is None else self.seed + n)

            total_reward = 0.0
            for _ in range(self.max_steps):

                # Choose action: select the output neuron with highest activation
                action = int(np.argmax(agent.output(observation.tolist())))

                observation, reward, terminated, truncated, _ = self.env.step(action)
                total_reward += float(reward)
                if terminated or truncated:
                    break

            total_rewards.append(total_reward)
        return total_rewards

    def evaluate(self, agent: Agent) -> float:
        return mean(self._run_episodes(agent))

    def solved(self, agent: Agent) -> bool:
        return all(reward >= self.max_steps for reward in self._run_episodes(agent))

    def close(self) -> None:
        self.env.close()
