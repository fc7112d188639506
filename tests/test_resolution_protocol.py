import unittest
from dataclasses import dataclass, field

from aide.core.resolution import (
    Abort,
    AbortReason,
    CreateNew,
    ExactMatch,
    NoMatch,
    Proceed,
    Suggestion,
    decide_creation,
    decide_lookup,
)


@dataclass
class ScriptedConfirmer:
    answers: list[bool] = field(default_factory=list)
    asked: list[tuple[str, str]] = field(default_factory=list)

    def confirm(self, original: str, suggested: str) -> bool:
        self.asked.append((original, suggested))
        return self.answers.pop(0)


class TestLookupIntent(unittest.TestCase):
    def test_exact_match_proceeds_without_asking(self) -> None:
        confirmer = ScriptedConfirmer()
        decision = decide_lookup("deploy", ExactMatch("deploy"), confirmer)
        self.assertEqual(decision, Proceed("deploy"))
        self.assertEqual(confirmer.asked, [])

    def test_confirmed_suggestion_proceeds_with_suggested_name(self) -> None:
        confirmer = ScriptedConfirmer([True])
        decision = decide_lookup("deploy-stagng", Suggestion("deploy-staging", 0.8), confirmer)
        self.assertEqual(decision, Proceed("deploy-staging"))
        self.assertEqual(confirmer.asked, [("deploy-stagng", "deploy-staging")])

    def test_declined_suggestion_aborts(self) -> None:
        decision = decide_lookup("deploy-stagng", Suggestion("deploy-staging", 0.8), ScriptedConfirmer([False]))
        self.assertEqual(decision, Abort("deploy-stagng", AbortReason.DECLINED))

    def test_no_match_aborts_as_not_found(self) -> None:
        confirmer = ScriptedConfirmer()
        decision = decide_lookup("zzz", NoMatch(), confirmer)
        self.assertEqual(decision, Abort("zzz", AbortReason.NOT_FOUND))
        self.assertEqual(confirmer.asked, [])

    def test_sub_threshold_suggestion_is_not_offered(self) -> None:
        confirmer = ScriptedConfirmer()
        decision = decide_lookup("x", Suggestion("xylophone", 0.1), confirmer)
        self.assertEqual(decision, Abort("x", AbortReason.NOT_FOUND))
        self.assertEqual(confirmer.asked, [])


class TestCreationIntent(unittest.TestCase):
    def test_exact_match_reuses_existing(self) -> None:
        confirmer = ScriptedConfirmer()
        self.assertEqual(decide_creation("deploy", ExactMatch("deploy"), confirmer), Proceed("deploy"))
        self.assertEqual(confirmer.asked, [])

    def test_confirmed_suggestion_reuses_existing(self) -> None:
        decision = decide_creation("deploy-stagng", Suggestion("deploy-staging", 0.8), ScriptedConfirmer([True]))
        self.assertEqual(decision, Proceed("deploy-staging"))

    def test_declined_suggestion_creates_with_typed_name(self) -> None:
        decision = decide_creation("deploy-stagng", Suggestion("deploy-staging", 0.8), ScriptedConfirmer([False]))
        self.assertEqual(decision, CreateNew("deploy-stagng"))

    def test_no_match_creates(self) -> None:
        confirmer = ScriptedConfirmer()
        self.assertEqual(decide_creation("fresh", NoMatch(), confirmer), CreateNew("fresh"))
        self.assertEqual(confirmer.asked, [])

    def test_custom_threshold_applies(self) -> None:
        confirmer = ScriptedConfirmer()
        decision = decide_creation("a", Suggestion("ab", 0.5), confirmer, threshold=0.6)
        self.assertEqual(decision, CreateNew("a"))
        self.assertEqual(confirmer.asked, [])


if __name__ == "__main__":
    unittest.main()
