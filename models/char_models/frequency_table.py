"""
Frequency Table

Per-context character statistics for the character-level language model.

Classes:
    - CharacterObservation: One distinct character seen after a context, with its
      count, probability and cumulative probability.
    - FrequencyTable: An ordered collection of observations, unique by character.

Notes:
    - Iteration order is first-seen-first and never changes once a character is
      inserted. Sampling walks the cumulative distribution in this order, so the
      order decides which character a given draw resolves to.
    - Probabilities are only meaningful after `finalize_probabilities` has run.
"""

import itertools


class CharacterObservation:
    """
    A character observed after a context, with its derived probabilities.
    """

    def __init__(self, character):
        self.character = character
        self.count = 1
        self.probability = 0.0
        self.cumulative_probability = 0.0

    def __repr__(self):
        return (
            f"CharacterObservation(character={self.character!r}, count={self.count}, "
            f"probability={self.probability}, cumulative_probability={self.cumulative_probability})"
        )

    def __str__(self):
        return f"({self.character} {self.count} {self.probability} {self.cumulative_probability})"


class FrequencyTable:
    """
    Counts how often each character followed a given context.

    The table is keyed by character, so every character appears at most once.
    Python dicts keep insertion order, which gives the stable first-seen-first
    iteration order used for sampling.
    """

    def __init__(self):
        self._observations = {}

    def update(self, character):
        """
        Records one more occurrence of `character`.

        Args:
            character (str): A single character.

        Raises:
            ValueError: If `character` is not a single character.
        """
        if not isinstance(character, str) or len(character) != 1:
            raise ValueError(
                f"Expected a single character, got {character!r}")

        observation = self._observations.get(character)
        if observation is None:
            self._observations[character] = CharacterObservation(character)
        else:
            observation.count += 1

    def finalize_probabilities(self):
        """
        Computes `probability` and `cumulative_probability` for every observation.

        Runs over the observations in iteration order, so the last observation's
        cumulative probability is 1.0 (up to floating-point rounding).

        Raises:
            ValueError: If the table has no observations.
        """
        total = self.total_count()
        if total == 0:
            raise ValueError(
                "Cannot compute probabilities for an empty frequency table")

        cumulative = 0.0
        for observation in self._observations.values():
            observation.probability = observation.count / total
            cumulative += observation.probability
            observation.cumulative_probability = cumulative

    def sample(self, r):
        """
        Picks a character using a uniform draw from [0, 1).

        Args:
            r (float): The random draw.

        Returns:
            str: The first character whose cumulative probability exceeds `r`,
                 or the last character if rounding left every value at or below `r`.

        Raises:
            ValueError: If the table has no observations.
        """
        if not self._observations:
            raise ValueError("Cannot sample from an empty frequency table")

        last = None
        for observation in self._observations.values():
            if r < observation.cumulative_probability:
                return observation.character
            last = observation

        return last.character

    def index_of(self, character):
        """Returns the position of `character`, or -1 if it was never observed."""
        for index, observed in enumerate(self._observations):
            if observed == character:
                return index
        return -1

    def get(self, index):
        """
        Returns the observation at `index`.

        Raises:
            IndexError: If `index` is negative or not smaller than the table size.
        """
        if index < 0 or index >= len(self._observations):
            raise IndexError(
                f"Index {index} out of range for frequency table of size {len(self._observations)}")
        return next(itertools.islice(self._observations.values(), index, None))

    def get_first(self):
        for observation in self._observations.values():
            return observation
        return None

    def remove(self, character):
        """
        Removes the observation for `character`.

        Returns:
            bool: True if an observation was removed, False if there was none.
        """
        if character in self._observations:
            del self._observations[character]
            return True
        return False

    def to_array(self):
        return list(self._observations.values())

    def count_of(self, character):
        observation = self._observations.get(character)
        return observation.count if observation is not None else 0

    def total_count(self):
        return sum(observation.count for observation in self._observations.values())

    def __len__(self):
        return len(self._observations)

    def __contains__(self, character):
        return character in self._observations

    def __iter__(self):
        return iter(self._observations.values())

    def __str__(self):
        return "(" + " ".join(str(observation) for observation in self._observations.values()) + ")"
