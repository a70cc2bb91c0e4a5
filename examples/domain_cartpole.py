"""
CartPole Domain

This module implements the classic CartPole balancing task from Gymnasium as
an evaluation domain. The goal is to evolve brains that can balance a pole on
a moving cart by applying left or right forces.

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
    Fitness = avg(total_reward - POSITION_PENALTY * |final_position|)

    - total_reward: Number of timesteps the pole remained balanced
    - position_penalty: Penalizes ending far from center (encourages stability)
    - Averaged over multiple episodes for robustness

    Recurrent brains (lstm, lstm_lite) have their state reset at the start of
    every episode.

Classes:
    Domain_CartPole: Domain for the CartPole balancing task

Usage:
    python domain_cartpole.py [config_file] [num_generations]
"""

import sys
import gymnasium as gym    # type: ignore
import numpy as np
from pathlib    import Path
from statistics import mean
from loguru     import logger

from evobrain import Config, Domain, Genotype, Population

class Domain_CartPole(Domain):
    """
    Domain for the CartPole-v1 balancing task.

    Every evaluation creates its own environment, seeded per episode, so
    evaluations can run concurrently and are reproducible.
    """

    POSITION_PENALTY = 10.0

    def __init__(self, num_episodes: int = 3, seed: int = 0):
        """
        Parameters:
            num_episodes: Number of episodes each genotype is evaluated on
            seed:         Seed of the first episode (episode n uses seed + n)
        """
        self._num_episodes = num_episodes
        self._seed         = seed

    def inputs(self) -> int:
        return 4

    def outputs(self) -> int:
        return 2

    def evaluate(self, genotype: Genotype) -> float:
        """
        The fitness of a genotype has two components:
        + the total reward returned by the environment - this
          is the number of time steps the pole stayed vertical
        + a penalty proportional to the absolute distance from
          the center at the end of the episode

        The fitness is the average of this quantity over multiple episodes.
        """
        env   = gym.make("CartPole-v1")
        brain = genotype.grow()

        rewards_adj = []
        for n in range(self._num_episodes):
            brain.reset_state()
            observation, _ = env.reset(seed=self._seed + n)

            # Run episode: select the output with highest activation
            total_reward, done = 0.0, False
            while not done:
                action = int(np.argmax(brain.forward_pass(observation)))
                observation, reward, terminated, truncated, _ = env.step(action)
                total_reward += reward
                done = terminated or truncated

            # NOTE: observation[0] is the cart position, between -2.4 and +2.4
            rewards_adj.append(total_reward - self.POSITION_PENALTY * abs(observation[0]))

        env.close()
        return max(0.0, mean(rewards_adj))

if __name__ == "__main__":
    config_file     = sys.argv[1] if len(sys.argv) > 1 else str(Path(__file__).parent / "config_cartpole.ini")
    num_generations = int(sys.argv[2]) if len(sys.argv) > 2 else 50

    config = Config(config_file)
    domain = Domain_CartPole()

    population = Population(config, domain)
    population.create_primordial_generation()
    for _ in range(num_generations):
        domain.evaluate_population(population, num_jobs=-1)
        population.rank()
        fittest = population.fittest_genotype()
        logger.info("Generation {:04d}: maximum fitness = {:.2f}", population.generation, fittest.fitness)
        if fittest.fitness >= 490:
            break
        population.create_next_generation()
