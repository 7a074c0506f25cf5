"""
Seed the milestone template catalog.

Usage:
    cd backend
    python -m scripts.seed_milestone_templates          # Dry-run (shows what will be written)
    python -m scripts.seed_milestone_templates --apply   # Actually write templates

Templates are keyed by a stable slug, so running the script again updates
the existing entries instead of duplicating them.

Requires: ENVIRONMENT=local in .env
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Suppress noisy SQLAlchemy logs during seed
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# Ensure backend root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from kidsteps.infrastructure.documents.milestone_template_repository import (  # noqa: E402
    DocumentMilestoneTemplateRepository,
)
from kidsteps.infrastructure.local.database import init_db  # noqa: E402
from kidsteps.infrastructure.local.document_store import SqliteDocumentStore  # noqa: E402
from kidsteps.models.milestone import MilestoneTemplate  # noqa: E402

# (slug, age range, min months, max months, category, description)
CATALOG: list[tuple[str, str, int, int, str, str]] = [
    ("0-3-social-smile", "0-3 months", 0, 3, "Social/Emotional", "Begins to smile at people"),
    ("0-3-head-up", "0-3 months", 0, 3, "Movement/Physical", "Holds head up when on tummy"),
    ("0-3-coos", "0-3 months", 0, 3, "Language/Communication", "Coos and makes gurgling sounds"),
    ("0-3-follows-things", "0-3 months", 0, 3, "Cognitive", "Follows things with eyes"),
    ("4-6-laughs", "4-6 months", 4, 6, "Social/Emotional", "Laughs out loud"),
    ("4-6-rolls-over", "4-6 months", 4, 6, "Movement/Physical", "Rolls over from tummy to back"),
    ("4-6-reaches-toy", "4-6 months", 4, 6, "Movement/Physical", "Reaches for a toy with one hand"),
    ("4-6-babbles", "4-6 months", 4, 6, "Language/Communication", "Babbles chains of sounds"),
    ("7-9-sits", "7-9 months", 7, 9, "Movement/Physical", "Sits without support"),
    ("7-9-stranger-aware", "7-9 months", 7, 9, "Social/Emotional", "Shows awareness of strangers"),
    ("7-9-responds-name", "7-9 months", 7, 9, "Language/Communication", "Responds to own name"),
    ("7-9-looks-for-dropped", "7-9 months", 7, 9, "Cognitive", "Looks for objects when dropped out of sight"),
    ("10-12-pulls-to-stand", "10-12 months", 10, 12, "Movement/Physical", "Pulls up to stand"),
    ("10-12-waves-bye", "10-12 months", 10, 12, "Language/Communication", "Waves bye-bye"),
    ("10-12-pincer-grasp", "10-12 months", 10, 12, "Movement/Physical", "Picks things up between thumb and pointer finger"),
    ("10-12-plays-games", "10-12 months", 10, 12, "Social/Emotional", "Plays games like pat-a-cake"),
    ("12-18-walks", "12-18 months", 12, 18, "Movement/Physical", "Walks without holding on"),
    ("12-18-points", "12-18 months", 12, 18, "Language/Communication", "Points to show interest"),
    ("12-18-words", "12-18 months", 12, 18, "Language/Communication", "Says a few words besides mama or dada"),
    ("12-18-cup", "12-18 months", 12, 18, "Movement/Physical", "Drinks from a cup without a lid"),
    ("18-24-kicks-ball", "18-24 months", 18, 24, "Movement/Physical", "Kicks a ball"),
    ("18-24-two-words", "18-24 months", 18, 24, "Language/Communication", "Says two words together"),
    ("18-24-pretend-play", "18-24 months", 18, 24, "Cognitive", "Plays simple pretend, like feeding a doll"),
    ("18-24-notices-others", "18-24 months", 18, 24, "Social/Emotional", "Notices when others are hurt or upset"),
    ("24-36-runs", "24-36 months", 24, 36, "Movement/Physical", "Runs well"),
    ("24-36-sentences", "24-36 months", 24, 36, "Language/Communication", "Talks in short sentences"),
    ("24-36-takes-turns", "24-36 months", 24, 36, "Social/Emotional", "Takes turns in games"),
    ("24-36-sorts", "24-36 months", 24, 36, "Cognitive", "Sorts objects by shape or color"),
]


def build_templates() -> list[MilestoneTemplate]:
    return [
        MilestoneTemplate(
            id=slug,
            age_range=age_range,
            min_age_months=min_age,
            max_age_months=max_age,
            category=category,
            description=description,
        )
        for slug, age_range, min_age, max_age, category, description in CATALOG
    ]


async def seed(dry_run: bool = True) -> None:
    templates = build_templates()

    if dry_run:
        print("=" * 60)
        print("  DRY RUN - showing what will be written")
        print("=" * 60)
        for template in templates:
            print(f"  {template.age_range:13s} {template.category:24s} {template.description}")
        print(f"\nMilestone templates ({len(templates)})")
        print("\n→ Run with --apply to write them")
        return

    await init_db()
    repo = DocumentMilestoneTemplateRepository(SqliteDocumentStore())
    count = await repo.seed(templates)
    print(f"  [OK] wrote {count} milestone templates")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the milestone template catalog.")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Actually write templates. Default is dry-run.",
    )
    args = parser.parse_args()
    asyncio.run(seed(dry_run=not args.apply))


if __name__ == "__main__":
    main()
