"""Time block x category preference table."""

from __future__ import annotations

from ...models.domain import Category, TimeBlock

# Weight in (0, 1]; categories missing from a block are not eligible for it.
BLOCK_CATEGORY_PRIORITY: dict[TimeBlock, dict[Category, float]] = {
    TimeBlock.BREAKFAST: {
        Category.RESTAURANT: 1.0,
        Category.CAFE: 0.8,
    },
    TimeBlock.MORNING_ACTIVITY: {
        Category.ATTRACTION: 1.0,
        Category.CULTURE: 1.0,
        Category.NATURE: 0.9,
        Category.ACTIVITY: 0.7,
        Category.THEME_PARK: 0.6,
        Category.SHOPPING: 0.4,
    },
    TimeBlock.LUNCH: {
        Category.RESTAURANT: 1.0,
    },
    TimeBlock.CAFE: {
        Category.CAFE: 1.0,
    },
    TimeBlock.AFTERNOON_ACTIVITY: {
        Category.ACTIVITY: 1.0,
        Category.THEME_PARK: 1.0,
        Category.ATTRACTION: 0.9,
        Category.SHOPPING: 0.9,
        Category.CULTURE: 0.8,
        Category.NATURE: 0.8,
    },
    TimeBlock.DINNER: {
        Category.RESTAURANT: 1.0,
    },
    TimeBlock.EVENING_ACTIVITY: {
        Category.NIGHT_VIEW: 1.0,
        Category.SHOPPING: 0.6,
        Category.ACTIVITY: 0.5,
    },
}


def block_priority(block: TimeBlock, category: Category) -> float:
    return BLOCK_CATEGORY_PRIORITY.get(block, {}).get(category, 0.0)


def eligible_categories(block: TimeBlock) -> set[Category]:
    return {category for category, weight in BLOCK_CATEGORY_PRIORITY.get(block, {}).items() if weight > 0}
