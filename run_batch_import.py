#!/usr/bin/env python3
"""
Run the AI batch import for game records.

This script provides a simple command-line interface to:
1. Extract the list of games mentioned in a text file
2. Extract a structured record for each game through the LLM
3. Append the records to the games JSON file and report failures

Usage:
    python run_batch_import.py --input games.txt --games-file ./data/games.json
"""

import argparse
import logging
import os
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

os.makedirs('logs', exist_ok=True)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('logs/batch_import.log', mode='a'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the batch import."""
    parser = argparse.ArgumentParser(description='Import games from free text using an LLM')
    parser.add_argument(
        '--input',
        type=str,
        required=True,
        help='Path to a text file mentioning one or more games'
    )
    parser.add_argument(
        '--games-file',
        type=str,
        default='./data/games.json',
        help='JSON game list to append imported games to'
    )
    parser.add_argument(
        '--failures-csv',
        type=str,
        default='./outputs/failed_imports.csv',
        help='Where to write entries that could not be processed'
    )
    parser.add_argument(
        '--batch-size',
        type=int,
        default=None,
        help='Games processed concurrently per batch (1-10)'
    )
    parser.add_argument(
        '--delay-ms',
        type=int,
        default=None,
        help='Pause between batches in milliseconds (minimum 500)'
    )
    parser.add_argument(
        '--model',
        type=str,
        default=None,
        help='Model to request from the inference service'
    )
    parser.add_argument(
        '--no-recognition',
        action='store_true',
        help='Skip the per-item content type recognition call'
    )

    args = parser.parse_args(argv)

    # Import here so logging is configured first
    from catalog_ai.llm_extraction import AIContentProcessor, ProcessorConfig, EmptyExtractionError
    from catalog_ai.output_generation import GameWriter

    config = ProcessorConfig.from_env(
        model=args.model,
        batch_size=args.batch_size,
        delay_ms=args.delay_ms,
        recognize_content=False if args.no_recognition else None
    )
    if not config.api_key:
        logger.error("SILICON_FLOW_API_KEY is not set. Export it or add it to a .env file.")
        return 1

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            input_text = f.read()
    except OSError as e:
        logger.error(f"Could not read input file: {e}")
        return 1

    if not input_text.strip():
        logger.error("Input file is empty")
        return 1

    processor = AIContentProcessor(config=config)

    def report_progress(processed, total):
        logger.info(f"Progress: {round(processed / total * 100)}% ({processed}/{total})")

    try:
        result = processor.process(input_text, on_progress=report_progress)
    except EmptyExtractionError as e:
        logger.error(str(e))
        return 1

    logger.info("=" * 50)
    logger.info(f"Processing complete: {len(result.success)} succeeded, {len(result.failed)} failed")

    for position, failure in enumerate(result.ordered_failed(), start=1):
        logger.warning(f"{position}. {failure.input[:50]}... -> {failure.error}")

    writer = GameWriter(args.games_file)
    failures_path = writer.write_failures(result.ordered_failed(), args.failures_csv)
    if failures_path:
        logger.info(f"- Failed entries saved in: {failures_path}")

    if not result.success:
        logger.error("No games were processed successfully")
        return 1

    category_counts = writer.write_games(result.ordered_success())
    logger.info(f"- Imported {len(result.success)} games into: {args.games_file}")
    logger.info(f"- Games per category: {category_counts}")
    logger.info("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
