QUIZ_GENERATION_TEMPLATE = """Generate {n} multiple-choice quiz questions based on this article. Each question should test understanding of key concepts.{focus}

Article:
{content}

Return ONLY valid JSON in this exact format (no markdown, no extra text):
[
  {{
    "id": "q1",
    "question": "What is being discussed?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 0
  }}
]

Make sure:
- correctAnswer is the index (0-3) of the correct option
- All 4 options are plausible and different from each other
- Questions test understanding, not just memory
- Questions are clear and concise
"""

AUTHOR_FOCUS = " The questions should be about the person who wrote the article."
