"""Intent engine: rules in, prioritized tasks and reminders out."""

from typing import TYPE_CHECKING, Iterable

from loguru import logger

from rulebot.agent.classify import SITUATIONS, Situation, classify
from rulebot.agent.extract import draft_action_items
from rulebot.index.similarity import SimilarityIndex
from rulebot.reminders.scheduler import ReminderScheduler
from rulebot.reminders.timing import compute_reminder_time
from rulebot.types import RAGResponse, Rule, Task, TaskPriority, VectorSearchResult
from rulebot.utils.helpers import Clock, IdFactory, new_id, system_clock

if TYPE_CHECKING:
    from rulebot.tasks.store import TaskStore

NO_RULES_RESPONSE = (
    "I don't have any relevant rules for this input. "
    "Please add rules that cover this scenario."
)


class IntentEngine:
    """
    Matches free text against the rule index and turns it into tasks.

    The rules retrieved for an input are the only knowledge used: they pick
    the situation, shape the response and are cited by every task generated
    from that input.
    """

    def __init__(
        self,
        index: SimilarityIndex,
        scheduler: ReminderScheduler,
        tasks: "TaskStore | None" = None,
        clock: Clock = system_clock,
        id_factory: IdFactory = new_id,
        top_k: int = 3,
        min_similarity: float = 0.0,
        situations: list[Situation] = SITUATIONS,
    ):
        self.index = index
        self.scheduler = scheduler
        self.tasks = tasks
        self.clock = clock
        self.id_factory = id_factory
        self.top_k = top_k
        self.min_similarity = min_similarity
        self.situations = situations

    def retrieve(self, text: str) -> list[VectorSearchResult]:
        """Top-k rules for ``text``, ignoring hits at or below ``min_similarity``."""
        results = self.index.search(text, self.top_k)
        return [r for r in results if r.similarity > self.min_similarity]

    def process_input(self, text: str) -> RAGResponse:
        """Answer ``text`` from the retrieved rules."""
        results = self.retrieve(text)
        if not results:
            logger.info("No relevant rules for input")
            return RAGResponse(response=NO_RULES_RESPONSE, relevant_rules=[], confidence=0.0)

        rules = [r.rule for r in results]
        situation = classify(text, rules, self.situations)
        logger.debug(f"Input classified as {situation.name} using {len(rules)} rules")

        return RAGResponse(
            response=situation.respond(text, rules),
            relevant_rules=rules,
            confidence=self._confidence(results),
        )

    def generate_tasks(self, text: str) -> list[Task]:
        """
        Turn ``text`` into tasks and schedule their reminders.

        Returns an empty list when no rule applies.
        """
        rag = self.process_input(text)
        if not rag.relevant_rules:
            return []

        now = self.clock()
        rule_ids = [rule.id for rule in rag.relevant_rules]
        tasks = []

        for item in draft_action_items(rag.response, text, now):
            task = Task(
                id=self.id_factory(),
                content=item.content,
                priority=item.priority,
                due_date=item.due_date,
                applied_rules=list(rule_ids),
                created_at=now,
                updated_at=now,
            )
            if task.due_date is not None:
                reminder_time = compute_reminder_time(task, task.priority, now)
                task.reminder_time = reminder_time
                self.scheduler.schedule(task, reminder_time)
            tasks.append(task)

        if self.tasks is not None:
            for task in tasks:
                self.tasks.add(task)

        logger.info(f"Generated {len(tasks)} tasks from {len(rule_ids)} rules (confidence {rag.confidence:.0f})")
        return tasks

    @staticmethod
    def get_priority_from_rules(rules: Iterable[Rule]) -> TaskPriority:
        """Priority implied by the most important rule; medium when empty."""
        priorities = [rule.priority for rule in rules]
        if not priorities:
            return TaskPriority.MEDIUM
        highest = max(priorities)
        if highest >= 8:
            return TaskPriority.HIGH
        if highest >= 4:
            return TaskPriority.MEDIUM
        return TaskPriority.LOW

    @staticmethod
    def _confidence(results: list[VectorSearchResult]) -> float:
        if not results:
            return 0.0
        mean = sum(r.similarity for r in results) / len(results)
        return max(0.0, min(100.0, mean * 100))
