"""Analyze Journal Entry

Manual check of the journal analysis pipeline: runs one text through the
analyzer (remote models when a Hugging Face token is configured, local
lexicon otherwise) and prints the generated title and result.

    python -m jobs.analyze_entry "Closed our seed round today, can't wait to hire"
"""
import argparse
import asyncio
import json
import logging

from bizzin.core.config import get_settings
from bizzin.services.analyzer import SentimentAnalyzer
from bizzin.services.titles import generate_business_title

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_SAMPLE = "I feel sad today and dont have the energy"


async def run(text: str, title: str | None, local_only: bool) -> dict:
    settings = get_settings()
    if local_only:
        settings = settings.model_copy(update={"remote_enabled": False})

    analyzer = SentimentAnalyzer.from_settings(settings)
    try:
        result = await analyzer.analyze(text, title)
    finally:
        await analyzer.aclose()

    heading = generate_business_title(text, result.business_category, result.primary_mood, result.energy)
    logger.info("Title: %s", heading)
    logger.info("Source: %s", result.analysis_source)
    return result.to_dict()


async def main():
    parser = argparse.ArgumentParser(description="Analyze a single journal entry")
    parser.add_argument("text", nargs="?", default=DEFAULT_SAMPLE, help="Entry content to analyze")
    parser.add_argument("--title", type=str, help="Optional entry title")
    parser.add_argument("--local-only", action="store_true", help="Skip the Hugging Face models")
    args = parser.parse_args()

    result = await run(args.text, args.title, args.local_only)
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
