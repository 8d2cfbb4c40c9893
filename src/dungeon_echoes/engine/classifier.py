"""Keyword classifier mapping free-text actions to intent categories.

The classifier is a closed, ordered rule table: the first rule whose
keywords appear in the lowercased action wins. Keywords match whole
words or phrases, so ``mirar`` does not trigger the movement verb ``ir``.

Priority (earlier rules shadow later ones):
    1. absurd       impossible feats, always wins
    2. combat       attack verbs
    3. social       talk and persuasion verbs
    4. movement     movement verbs, direction tokens, exit tokens
    5. item_pickup  acquisition verbs
    6. observation  everything else

Example:
    >>> classify("Intento volar y atacar al guardia")
    <IntentCategory.ABSURD: 'absurd'>
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import cached_property

from dungeon_echoes.core.logging import get_logger
from dungeon_echoes.models.enums import IntentCategory


logger = get_logger(__name__)


ABSURD_PATTERNS: tuple[str, ...] = (
    "volar",
    "vuelo",
    "teletransportar",
    "teletransporto",
    "destruir el mundo",
    "saltar 10 pisos",
    "matar a todos",
    "superpoder",
    "invencible",
    "crear",
    "fly",
    "teleport",
    "destroy the world",
    "kill everyone",
    "superpower",
    "invincible",
    "wish",
)

COMBAT_VERBS: tuple[str, ...] = (
    "atacar",
    "ataco",
    "ataca",
    "golpear",
    "golpeo",
    "matar",
    "mato",
    "pelear",
    "peleo",
    "attack",
    "strike",
    "kill",
    "fight",
)

SOCIAL_VERBS: tuple[str, ...] = (
    "hablar",
    "hablo",
    "convencer",
    "convenzo",
    "engañar",
    "engaño",
    "intimidar",
    "intimido",
    "amenazar",
    "amenazo",
    "decir",
    "digo",
    "talk",
    "convince",
    "deceive",
    "intimidate",
    "speak",
)

MOVEMENT_VERBS: tuple[str, ...] = (
    "ir",
    "voy",
    "vamos",
    "moverse",
    "mover",
    "muevo",
    "entrar",
    "entro",
    "avanzar",
    "avanzo",
    "caminar",
    "camino",
    "cruzar",
    "cruzo",
    "go",
    "move",
    "walk",
    "enter",
)

DIRECTION_TOKENS: tuple[str, ...] = (
    "norte",
    "sur",
    "exterior",
    "north",
    "south",
    "outside",
)

EXIT_TOKENS: tuple[str, ...] = (
    "salir",
    "salgo",
    "exit",
    "leave",
)

PICKUP_VERBS: tuple[str, ...] = (
    "coger",
    "cojo",
    "tomar",
    "tomo",
    "agarrar",
    "agarro",
    "recoger",
    "recojo",
    "take",
    "grab",
    "pick up",
)


def compile_keywords(keywords: Iterable[str]) -> re.Pattern[str]:
    """Compile keywords into one whole-word alternation."""
    alternation = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)")


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Whether any keyword appears in ``text`` as a whole word or phrase."""
    return compile_keywords(keywords).search(text) is not None


def normalize(text: str) -> str:
    """Lowercase and collapse whitespace."""
    return " ".join(text.lower().split())


@dataclass(frozen=True)
class IntentRule:
    """A rule of the classification table."""

    category: IntentCategory
    keywords: tuple[str, ...]

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        return compile_keywords(self.keywords)

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(IntentCategory.ABSURD, ABSURD_PATTERNS),
    IntentRule(IntentCategory.COMBAT, COMBAT_VERBS),
    IntentRule(IntentCategory.SOCIAL, SOCIAL_VERBS),
    IntentRule(IntentCategory.MOVEMENT, MOVEMENT_VERBS + DIRECTION_TOKENS + EXIT_TOKENS),
    IntentRule(IntentCategory.ITEM_PICKUP, PICKUP_VERBS),
)


def classify(action_text: str, rules: Iterable[IntentRule] = INTENT_RULES) -> IntentCategory:
    """Classify an action into exactly one intent category.

    Args:
        action_text: Free-text action; normalized before matching.
        rules: Ordered rule table.

    Returns:
        The category of the first matching rule, or OBSERVATION.
    """
    text = normalize(action_text)
    for rule in rules:
        if rule.matches(text):
            logger.debug("Intent classified", category=rule.category.value, text=text)
            return rule.category
    return IntentCategory.OBSERVATION


__all__ = [
    "ABSURD_PATTERNS",
    "COMBAT_VERBS",
    "SOCIAL_VERBS",
    "MOVEMENT_VERBS",
    "DIRECTION_TOKENS",
    "EXIT_TOKENS",
    "PICKUP_VERBS",
    "IntentRule",
    "INTENT_RULES",
    "classify",
    "compile_keywords",
    "contains_keyword",
    "normalize",
]
