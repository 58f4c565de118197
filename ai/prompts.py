# ai/prompts.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from models.job import SelectedJobDetail

# Fixed prompt-size budget per job description.
DESCRIPTION_CHAR_LIMIT = 300
ELLIPSIS = "..."
JOB_DELIMITER = "\n\n---\n\n"

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 0.7
    top_k: int = 1
    top_p: float = 1.0
    max_output_tokens: int = 16384
    enable_search: bool = True
    # (category, threshold) pairs
    safety_settings: Tuple[Tuple[str, str], ...] = field(
        default_factory=lambda: tuple((c, BLOCK_MEDIUM_AND_ABOVE) for c in HARM_CATEGORIES)
    )


PROJECT_GENERATION_CONFIG = GenerationConfig()


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    config: GenerationConfig


PROJECT_PROMPT_TEMPLATE = """
You are an expert career advisor helping a graduate find an impressive project for their resume.
The graduate is interested in the general field of "{field}" and specifically in the roles: {roles}.
They are looking for opportunities near "{location}".

They have identified the following job postings as particularly interesting:
{jobs}

Based on these preferences and the common requirements/skills sought by companies hiring for these roles (as exemplified by the job descriptions),
propose a specific, **actionable project that a graduate can realistically complete within *one week* of focused work** (keep the scope reasonable, nothing too crazy).

The project should NOT be too simple (e.g., "Hello World" or basic CRUD apps), and should demonstrate both **breadth and depth in technical skills** relevant to the target roles. However, do not propose an enterprise-level or unreasonably large project for one week.

Your output MUST be a JSON object with the following structure:
{{
  "projectTitle": "A concise and catchy title for the project",
  "projectDescription": "A 2-3 sentence description of the project, explaining its purpose and relevance to the target roles/companies.",
  "projectAppeal": "A short paragraph (2-4 sentences) explaining WHY this project would appeal to the companies based on the job descriptions provided and general industry knowledge for the field/roles.",
  "keySkillsDemonstrated": "Skill 1, Skill 2, Skill 3 (e.g., Python, Data Analysis, Problem Solving)",
  "projectChecklist": [
    "A clear, actionable step 1 for the project",
    "Actionable step 2",
    "Actionable step 3",
    "...",
    "Final step (e.g., 'Deploy the project' or 'Write a report summarizing findings')"
  ],
  "skillsRequired": "I see that these companies use Next.js, AWS, ...",
  "markdownReport": "# Title\\n\\nShort intro...\\n\\n## Why this project will impress\\n...\\n\\n### Key skills\\nPython, Next.js\\n\\n### Project checklist\\n* [ ] step one\\n* [ ] step two"
}}

Additional formatting requirements:
- Render *all* textual fields (except arrays) using Markdown where appropriate.
- Use **clear Markdown headings** (#, ##, ###) to separate sections inside any multi-line Markdown strings (e.g., projectDescription, projectAppeal, markdownReport).
- Inside **markdownReport**, include a checklist with `* [ ]` items ready for GitHub README usage.
- The `markdownReport` MUST NOT cite or reference web results or sources.
"""


def truncate_description(description: str) -> str:
    """First 300 characters plus a literal ellipsis, always appended."""
    return (description or "")[:DESCRIPTION_CHAR_LIMIT] + ELLIPSIS


def format_job_summaries(jobs: Sequence[SelectedJobDetail]) -> str:
    return JOB_DELIMITER.join(
        f"Company: {job.company}\nTitle: {job.title}\nDescription: {truncate_description(job.description)}"
        for job in jobs
    )


def build_project_prompt(
    field: str,
    roles: Sequence[str],
    location: str,
    jobs: Sequence[SelectedJobDetail],
) -> str:
    return PROJECT_PROMPT_TEMPLATE.format(
        field=field,
        roles=", ".join(roles),
        location=location,
        jobs=format_job_summaries(jobs),
    )


def build_project_request(
    field: str,
    roles: Sequence[str],
    location: str,
    jobs: Sequence[SelectedJobDetail],
) -> GenerationRequest:
    return GenerationRequest(
        prompt=build_project_prompt(field, roles, location, jobs),
        config=PROJECT_GENERATION_CONFIG,
    )
