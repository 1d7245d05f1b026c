"""
Study Tool Prompts

One builder per study tool. Each takes the request fields as plain
values and returns the full prompt; the answer is free markdown text.
"""


def build_syllabus_prompt(std: str, subject: str) -> str:
    return f"""Generate a comprehensive syllabus for {std} grade {subject} subject based on current National Educational Policy (NEP 2020).

Please structure the response with:
- Clear section headings using markdown (## for main sections, ### for subsections)
- Organized topics and subtopics
- Learning objectives for each unit
- Suggested activities and assessments
- Duration for each unit
- Key skills to be developed

Guidelines:
- Adapt content to the age and cognitive level of {std} students
- Include modern pedagogical approaches
- Focus on skill development and practical application
- Use bullet points for better readability
- Make it engaging and student-friendly

Please provide a well-structured syllabus:"""


def build_essay_prompt(topic: str, essay_type: str, length: int) -> str:
    return f"""Write a {essay_type} essay on "{topic}" with approximately {length} words.

Guidelines:
- Use clear, engaging language
- Include an introduction, body paragraphs, and conclusion
- Provide relevant examples and evidence
- Use proper essay structure and formatting
- Make it educational and informative
- Use markdown formatting for better readability

Please write a well-structured essay:"""


def build_code_explanation_prompt(code: str, language: str) -> str:
    return f"""Explain this {language} code in detail:

```{language}
{code}
```

Please provide:
1. A clear explanation of what the code does
2. Line-by-line breakdown of important parts
3. Key concepts and programming principles used
4. Potential improvements or optimizations
5. Common use cases for this type of code

Use markdown formatting for better readability."""


def build_study_plan_prompt(subjects: str, hours: str, days: str, goals: str) -> str:
    return f"""Create a personalized study plan for a student with the following requirements:

Subjects: {subjects}
Available study hours per day: {hours}
Study days per week: {days}
Learning goals: {goals}

Please provide:
1. A weekly study schedule
2. Time allocation for each subject
3. Study techniques and strategies
4. Break and rest periods
5. Progress tracking methods
6. Tips for maintaining motivation

Use markdown formatting and make it practical and achievable."""


def build_flashcards_prompt(topic: str, subject: str, count: int) -> str:
    return f"""Generate {count} flashcards for {subject} on the topic: "{topic}"

Format each flashcard as:
**Question:** [Clear, concise question]
**Answer:** [Detailed, educational answer]

Guidelines:
- Questions should test understanding, not just memorization
- Answers should be comprehensive but concise
- Include a mix of difficulty levels
- Cover key concepts and important details
- Make them engaging and educational

Use markdown formatting for better readability."""
