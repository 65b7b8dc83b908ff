"""Puzzle Judge agent: model-scored composition with server-enforced thresholds."""

import logging
from typing import Any, Dict, List

from .base import BaseAgent
from ..config import settings
from ..exceptions import ModelCallError
from ..models.judgments import JudgeResult, PuzzleJudgeInput, PuzzleJudgment, PUZZLE_EVENT_COUNT
from ..quality.thresholds import (
    APPROVAL_THRESHOLD,
    MIN_COMPONENT_SCORE,
    enforce_approval_thresholds,
    validate_judge_input
)

logger = logging.getLogger(__name__)

JUDGE_SYSTEM_PROMPT = f"""You are a puzzle judge evaluating whether a set of {PUZZLE_EVENT_COUNT} historical event clues makes a high-quality year-guessing puzzle.

GAME RULES:
- Players guess a historical year based on event clues
- Hints are revealed one at a time (Hint 1 first, then 2, 3, 4, 5, 6)
- Players should be able to guess correctly by hint 4-6

PUZZLE QUALITY CRITERIA:

1. DIFFICULTY GRADIENT (Hard -> Easy)
   - Hint 1: Obscure, requires deep history knowledge
   - Hints 2-5: Progressively more famous/recognizable
   - Hint 6: "Clincher" - iconic event most people know
   Score 1.0 if gradient is perfect, 0.0 if inverted

2. TOPIC DIVERSITY
   - Mix topics: war, politics, science, culture, sports, technology, economy, religion, arts
   - Avoid 3+ clues from same domain
   Score 1.0 if well-mixed, 0.0 if all same topic

3. GEOGRAPHIC SPREAD
   - Include events from multiple regions (Europe, Americas, Asia, Africa, Middle East)
   - Avoid Western-only or single-region puzzles
   Score 1.0 if global, 0.0 if single region

4. GUESSABILITY
   - By hint 4-6, a history enthusiast should deduce the year
   - Events should collectively "point" to the target year
   Score 1.0 if clearly guessable, 0.0 if impossible

APPROVAL THRESHOLD:
- qualityScore >= {APPROVAL_THRESHOLD} to approve
- All composition scores >= {MIN_COMPONENT_SCORE}

OUTPUT FORMAT:
Return a JSON object with:
- approved: boolean (true if meets thresholds)
- qualityScore: 0-1 (weighted average of composition scores)
- ordering.recommended: array of {PUZZLE_EVENT_COUNT} event texts, ordered HARD -> EASY
- ordering.rationale: brief explanation of ordering
- composition: {{ topicDiversity, geographicSpread, difficultyGradient, guessability }} (0-1 each)
- issues: array of brief problems (if any)
- suggestions: array of brief improvements (if any)

BE CONCISE. Keep issues/suggestions to 1-5 words each."""

ORDERING_MISMATCH_ISSUE = "Recommended ordering did not match input events"


class PuzzleJudgeAgent(BaseAgent):
    """Asks the model to judge a candidate puzzle, then overrides its verdict
    with the recomputed one."""

    def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Judge a puzzle given ``year``, ``era`` and ``events``."""
        self.validate_input(input_data, ["year", "era", "events"])
        judge_input = PuzzleJudgeInput(**{key: input_data[key] for key in ("year", "era", "events")})
        validate_judge_input(judge_input)

        try:
            result = self.judge(judge_input)

            return {
                "success": True,
                "judgment": result.judgment.model_dump(by_alias=True),
                "llm": result.llm.model_dump(),
                "metadata": self.get_agent_metadata()
            }

        except (ModelCallError, ValueError) as e:
            logger.error(f"Error in Puzzle Judge: {e}")
            return {
                "success": False,
                "error": str(e),
                "metadata": self.get_agent_metadata()
            }

    def judge(self, judge_input: PuzzleJudgeInput) -> JudgeResult:
        """Judge the first six events and return the authoritative judgment.

        Raises ``InvalidJudgeInputError`` for bad input, ``ModelCallError`` when
        the provider fails and ``ValueError`` when its output is unusable.
        """
        validate_judge_input(judge_input)
        events = judge_input.events[:PUZZLE_EVENT_COUNT]

        response = self.call_llm_with_cache(
            self.build_user_prompt(judge_input.year, judge_input.era, events),
            system=JUDGE_SYSTEM_PROMPT,
            max_tokens=settings.judge_max_tokens,
            temperature=settings.judge_temperature
        )

        claimed = PuzzleJudgment.model_validate(self.parse_json_response(response.text))
        logger.info(
            f"Judge responded for {judge_input.year} {judge_input.era}: "
            f"approved={claimed.approved}, qualityScore={claimed.quality_score} "
            f"({response.usage.total_tokens} tokens, cache_hit={response.usage.cache_hit})"
        )

        judgment = enforce_approval_thresholds(self._verify_ordering(claimed, events))
        return JudgeResult(judgment=judgment, llm=response.usage)

    def build_user_prompt(self, year: int, era: str, events: List[str]) -> str:
        """Prompt listing the target year and numbered events."""
        event_list = "\n".join(f"{i + 1}. {event}" for i, event in enumerate(events))

        return f"""Target year: {abs(year)} {era}

Evaluate this puzzle and reorder the events from HARDEST to EASIEST:

{event_list}

IMPORTANT:
1. Return the events in your recommended order (hard -> easy)
2. Use the EXACT event text from the input
3. Score each composition dimension 0-1
4. Approve only if qualityScore >= {APPROVAL_THRESHOLD} and all components >= {MIN_COMPONENT_SCORE}"""

    def _verify_ordering(self, judgment: PuzzleJudgment, events: List[str]) -> PuzzleJudgment:
        """Fall back to input order when the model's ordering is not a permutation of the events."""
        recommended = judgment.ordering.recommended
        if sorted(recommended) == sorted(events):
            return judgment

        logger.warning(f"Judge ordering {recommended} does not match input events, keeping input order")
        ordering = judgment.ordering.model_copy(update={"recommended": list(events)})
        return judgment.model_copy(update={
            "ordering": ordering,
            "issues": judgment.issues + [ORDERING_MISMATCH_ISSUE]
        })
