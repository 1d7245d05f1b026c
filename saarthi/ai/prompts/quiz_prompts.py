"""
Quiz Generation Prompts

The quiz prompt demands a bare JSON object. Models do not always
comply, so the output still goes through parse_quiz_json.
"""


def build_quiz_generation_prompt(
    topic: str,
    difficulty: str = "medium",
    question_type: str = "mcq",
    count: int = 5,
) -> str:
    type_label = "multiple-choice (MCQ)" if question_type == "mcq" else "subjective"

    return f"""Generate a {difficulty} level quiz on the topic: "{topic}" with exactly {count} {type_label} questions.

IMPORTANT: You must respond with ONLY valid JSON in this exact format:
{{
  "questions": [
    {{
      "questionNumber": 1,
      "question": "What is the capital of France?",
      "options": ["A. London", "B. Paris", "C. Berlin", "D. Madrid"],
      "correctAnswer": "B",
      "explanation": "Paris is the capital and largest city of France."
    }}
  ]
}}

Requirements:
- For MCQ questions: Always provide exactly 4 options labeled A, B, C, D
- For Subjective questions: Use the options field for key points and explanation for detailed answer
- Make questions appropriate for {difficulty} difficulty level
- Include clear, educational explanations
- Ensure questions test understanding, not just memorization
- Do not include any text before or after the JSON object
- The response must be valid JSON that can be parsed directly

Generate exactly {count} questions for the topic: {topic}"""
