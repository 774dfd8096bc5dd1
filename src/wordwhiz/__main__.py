"""Command line entry point.

Usage:
    python -m wordwhiz            show the word of the day
    python -m wordwhiz <word>     look a word up
    python -m wordwhiz stats      show learning progress and quiz statistics
    python -m wordwhiz reset      reset quiz statistics
"""
import asyncio
import logging
import sys
from typing import List

from wordwhiz.app import WordWhiz
from wordwhiz.config import settings
from wordwhiz.errors import WordWhizError
from wordwhiz.logging_config import setup_logging
from wordwhiz.models.word_models import WordRecord
from wordwhiz.monitoring import start_monitoring

logger = logging.getLogger(__name__)


def format_word(record: WordRecord) -> str:
    lines = [f"{record.word} ({record.part_of_speech or 'n/a'})", f"  {record.meaning}"]
    if record.synonyms:
        lines.append(f"  synonyms: {', '.join(record.synonyms[:8])}")
    if record.antonyms:
        lines.append(f"  antonyms: {', '.join(record.antonyms[:8])}")
    for example in record.examples[:3]:
        lines.append(f"  e.g. {example}")
    return "\n".join(lines)


async def main(args: List[str]) -> int:
    """Run a single command."""
    async with WordWhiz() as app:
        try:
            if args and args[0] == "stats":
                summary = await app.progress()
                print(f"Words learned:    {summary.words_learned} "
                      f"({summary.recently_learned} this week, {summary.needs_review} to review)")
                print(f"Quizzes taken:    {summary.quizzes_taken}")
                print(f"Average score:    {summary.average_score}%")
                print(f"Streak:           {summary.streak} days")
                print(f"Week (Sun..Sat):  {summary.weekly_progress}")
            elif args and args[0] == "reset":
                await app.reset_quiz_stats()
                print("Quiz statistics reset.")
            elif args:
                print(format_word(await app.lookup(args[0])))
            else:
                print(format_word(await app.word_of_day()))
        except WordWhizError as e:
            logger.error(f"Command failed: {e}")
            return 1
    return 0


def run() -> None:
    """Console script entry point."""
    setup_logging("Starting WordWhiz ...")

    if settings.monitoring.enabled:
        start_monitoring(settings.monitoring.port)

    try:
        sys.exit(asyncio.run(main(sys.argv[1:])))
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")


if __name__ == "__main__":
    run()
