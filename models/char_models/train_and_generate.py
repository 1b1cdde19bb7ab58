#!/usr/bin/env python3
"""
Character Language Model Training and Generation Script

Trains a character-level language model on a corpus file and prints text
generated from it.

Usage:
    python -m models.char_models.train_and_generate "Now is " fixed corpus.txt -w 7 -n 200

Positional arguments are the initial text, the generation mode and the corpus
path. The window length (-w) and the number of characters to generate (-n)
default to `window_length` and `text_length` from the configuration. In "fixed"
mode the random generator is seeded (with --seed, or `fixed_seed` from the
configuration), so repeated runs print the same text. In "random" mode every run
differs. CSV corpora read the column `csv_column`; set `csv_header` to the header
row (usually 0) when the column is given by name.
"""
import os
import sys
import argparse

# Add project root to Python path to ensure imports work correctly
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from models.char_models.corpus import open_corpus
from models.char_models.language_model import LanguageModel
from utils.config_loader import load_config
from utils.loggers.json_logger import get_logger, log_json
from utils.system_monitoring import ResourceMonitor


def build_parser():
    parser = argparse.ArgumentParser(
        description="Train a character language model and generate text")
    parser.add_argument("initial_text",
                        help="Text to start generating from")
    parser.add_argument("mode", choices=["random", "fixed"],
                        help="'fixed' seeds the generator for repeatable output")
    parser.add_argument("corpus",
                        help="Path to the training corpus (.csv or plain text)")
    parser.add_argument("-w", "--window-length", type=int,
                        help="Number of characters in a context (default: window_length from the configuration)")
    parser.add_argument("-n", "--text-length", type=int,
                        help="Number of characters to generate (default: text_length from the configuration)")
    parser.add_argument("--seed", type=int,
                        help="Seed used in fixed mode (default: fixed_seed from the configuration)")
    parser.add_argument("--config",
                        help="Path to a YAML configuration file")
    parser.add_argument("--env", default=None,
                        help="Environment name used to select configs/language_model_<env>.yaml")
    parser.add_argument("--log-file",
                        help="Write JSON logs to this file as well")
    return parser


def run(args, config, logger):
    """
    Train on the corpus and generate text.

    Args:
        args (argparse.Namespace): Parsed command-line arguments
        config (dict): Loaded configuration
        logger (Logger): Logger for the run

    Returns:
        str: The generated text
    """
    seed = None
    if args.mode == "fixed":
        seed = args.seed if args.seed is not None else config["fixed_seed"]

    window_length = args.window_length if args.window_length is not None else config["window_length"]
    text_length = args.text_length if args.text_length is not None else config["text_length"]

    resource_monitor = ResourceMonitor(logger=logger)
    model = LanguageModel(
        window_length,
        seed=seed,
        logger=logger,
        resource_monitor=resource_monitor,
        progress_interval=config["progress_interval"]
    )

    characters = open_corpus(
        args.corpus,
        encoding=config["corpus_encoding"],
        csv_column=config["csv_column"],
        csv_header=config["csv_header"]
    )

    resource_monitor.start("language_model_training")
    try:
        model.train(characters)
    finally:
        resource_monitor.stop()

    text = model.generate(args.initial_text, text_length)
    log_json(logger, "Generation completed", {
        "window_length": window_length,
        "requested": text_length,
        "generated": len(text) - len(args.initial_text),
        "seeded": seed is not None
    }, operation="language_model_generation")
    return text


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(config_path=args.config, environment=args.env)
    logging_config = config["logging"]
    logger = get_logger(
        "char_language_model",
        log_file=args.log_file or logging_config["log_file"],
        console_json=logging_config["console_json"],
        level=logging_config["level"]
    )

    try:
        text = run(args, config, logger)
    except (FileNotFoundError, KeyError, ValueError) as e:
        logger.error(f"Run failed: {e}")
        return 1

    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
