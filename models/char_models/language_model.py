"""
Character-Level Language Model

A fixed-order Markov model over characters. Training slides a window of
`window_length` characters over a corpus and counts which character follows each
window. Generation repeatedly looks up the last `window_length` characters of the
text produced so far and samples the next character from the learned counts.

Classes:
    - LanguageModel: Trains the context table and generates text from it.

Example:
    >>> model = LanguageModel(3, seed=20)
    >>> stats = model.train("abcabcabcabc")
    >>> model.generate("abc", 3)
    'abcabc'
"""

import itertools
import logging
import random
import time

from models.char_models.frequency_table import FrequencyTable


class LanguageModel:
    """
    Maps every context (a string of `window_length` characters) seen during
    training to a FrequencyTable of the characters that followed it.
    """

    def __init__(self, window_length, seed=None, logger=None, resource_monitor=None,
                 progress_interval=1000000):
        """
        Initializes an untrained model.

        Args:
            window_length (int): Number of characters in a context. Must be positive.
            seed (int, optional): Seed for the random generator. Generating from
                models built with the same seed and corpus gives the same text.
                When omitted the generator is seeded from system entropy.
            logger (Logger, optional): Logger for training and generation events.
            resource_monitor (ResourceMonitor, optional): Receives progress reports
                every `progress_interval` characters while training.
            progress_interval (int): Characters between progress reports.

        Raises:
            ValueError: If `window_length` is not a positive integer.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        if isinstance(window_length, bool) or not isinstance(window_length, int) or window_length < 1:
            error_msg = f"window_length must be a positive integer, got {window_length!r}"
            self.logger.error(error_msg)
            raise ValueError(error_msg)

        self.window_length = window_length
        self.seed = seed
        self.random_generator = random.Random(seed)
        self.table = {}
        self.resource_monitor = resource_monitor
        self.progress_interval = progress_interval

        self.logger.debug("LanguageModel initialized", extra={
            "metrics": {"window_length": window_length, "seeded": seed is not None}
        })

    def train(self, characters):
        """
        Builds the context table from a corpus in a single left-to-right pass.

        Args:
            characters (iterable of str): The corpus, one character at a time.
                A plain string works, as does any of the generators in
                `models.char_models.corpus`.

        Returns:
            dict: Training statistics

        Notes:
            - A corpus shorter than `window_length` never forms a full context,
              so nothing is learned and the table stays empty.
            - Training again adds to the existing counts and recomputes every
              table's probabilities.
        """
        start_time = time.time()
        stream = iter(characters)

        window = "".join(itertools.islice(stream, self.window_length))
        character_count = len(window)

        if character_count < self.window_length:
            self.logger.warning("Corpus too short for training", extra={
                "metrics": {
                    "window_length": self.window_length,
                    "character_count": character_count
                }
            })
            return {
                "character_count": character_count,
                "context_count": len(self.table),
                "transition_count": 0,
                "training_time": time.time() - start_time
            }

        self.logger.info("Training started", extra={
            "metrics": {"window_length": self.window_length}
        })

        transition_count = 0
        for c in stream:
            probs = self.table.get(window)
            if probs is None:
                probs = FrequencyTable()
                self.table[window] = probs

            probs.update(c)
            window = window[1:] + c

            transition_count += 1
            if self.resource_monitor and transition_count % self.progress_interval == 0:
                self.resource_monitor.log_progress("Training progress", extra_metrics={
                    "characters_processed": character_count + transition_count,
                    "context_count": len(self.table)
                })

        character_count += transition_count

        for probs in self.table.values():
            self.calculate_probabilities(probs)

        stats = {
            "character_count": character_count,
            "context_count": len(self.table),
            "transition_count": transition_count,
            "training_time": time.time() - start_time
        }
        self.logger.info("Training completed", extra={"metrics": stats})
        return stats

    def calculate_probabilities(self, probs):
        """Sets the probability and cumulative probability of every entry in `probs`."""
        probs.finalize_probabilities()

    def get_random_char(self, probs):
        """
        Draws a character from `probs` using the model's random generator.

        Args:
            probs (FrequencyTable): A table with computed probabilities

        Returns:
            str: The sampled character
        """
        r = self.random_generator.random()
        return probs.sample(r)

    def generate(self, initial_text, text_length):
        """
        Generates text that continues `initial_text`.

        Args:
            initial_text (str): Text to start from. Its last `window_length`
                characters are the first context.
            text_length (int): Number of characters to append.

        Returns:
            str: `initial_text` followed by up to `text_length` generated characters.
                 Generation stops early when the current context was never seen in
                 training, and is skipped entirely when `initial_text` is shorter
                 than `window_length`.

        Raises:
            ValueError: If `text_length` is not a non-negative integer.
        """
        if isinstance(text_length, bool) or not isinstance(text_length, int) or text_length < 0:
            error_msg = f"text_length must be a non-negative integer, got {text_length!r}"
            self.logger.error(error_msg)
            raise ValueError(error_msg)

        if len(initial_text) < self.window_length:
            return initial_text

        window = initial_text[len(initial_text) - self.window_length:]
        generated = []

        while len(generated) < text_length:
            probs = self.table.get(window)
            if probs is None:
                self.logger.info("Generation stopped at unknown context", extra={
                    "metrics": {
                        "context": window,
                        "generated": len(generated),
                        "requested": text_length
                    }
                })
                break

            next_char = self.get_random_char(probs)
            generated.append(next_char)
            window = window[1:] + next_char

        return initial_text + "".join(generated)

    def frequency_table(self, context):
        return self.table.get(context)

    def contexts(self):
        return list(self.table.keys())

    def __contains__(self, context):
        return context in self.table

    def __len__(self):
        return len(self.table)

    def __str__(self):
        return "".join(f"{context} : {probs}\n" for context, probs in self.table.items())
