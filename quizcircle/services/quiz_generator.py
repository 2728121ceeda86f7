"""Fill-in-the-blank quiz generation straight from article text.

Each usable sentence becomes one question: a word longer than four
characters is blanked out and offered alongside three distractors derived
from it. No model, no network; used on its own and as the fallback for the
AI path.
"""
import math
import random
import re
import string
from typing import Any, Dict, List, Optional, Sequence

BLANK = "______"
MIN_SENTENCE_CHARS = 20
MIN_WORD_CHARS = 4

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def split_sentences(content: str) -> List[str]:
    parts = (s.strip() for s in _SENTENCE_SPLIT.split(content or ""))
    return [s for s in parts if len(s) > MIN_SENTENCE_CHARS]


def generate_distractor(word: str, variant: int) -> str:
    """A wrong option built from the answer word."""
    if variant == 1:
        return word + random.choice(("ing", "ed"))
    if variant == 2:
        first = word[:1]
        letters = [c for c in string.ascii_uppercase if c not in (first, first.upper())]
        return random.choice(letters) + word[1:]
    if variant == 3:
        tagged = "alternative_" + word[:3]
        return tagged if tagged != word else word + "_option"
    return word + "_option"


def generate_quiz_from_article(content: str, num_questions: int = 5) -> List[Dict[str, Any]]:
    sentences = split_sentences(content)
    questions: List[Dict[str, Any]] = []

    for i, sentence in enumerate(sentences[:max(num_questions, 0)]):
        candidates = [w for w in sentence.split() if len(w) > MIN_WORD_CHARS]
        if not candidates:
            continue

        answer = random.choice(candidates)
        options = [answer] + [generate_distractor(answer, v) for v in (1, 2, 3)]
        random.shuffle(options)

        questions.append({
            "id": f"q{i + 1}",
            "question": sentence.replace(answer, BLANK, 1),
            "options": options,
            "correctAnswer": options.index(answer),
        })

    return questions


def score_quiz(answers: Sequence[Optional[int]], questions: Sequence[Dict[str, Any]]) -> int:
    """Percentage of questions answered correctly, rounded half up.

    answers[i] is compared with questions[i]; extra answers are ignored and
    missing or None answers count as wrong. A quiz with no questions scores 0.
    """
    if not questions:
        return 0
    correct = 0
    for given, q in zip(answers, questions):
        if given is not None and given == q.get("correctAnswer"):
            correct += 1
    return int(math.floor(100 * correct / len(questions) + 0.5))
