import pytest

from ai.client import GatewayResponse
from models.job import JobPosting

RECOMMENDATION_JSON = """{
  "projectTitle": "Load-Shedding Aware Task Scheduler",
  "projectDescription": "A small web service that plans compute jobs around published outage windows.",
  "projectAppeal": "Companies in Cape Town value engineers who design for unreliable power.",
  "keySkillsDemonstrated": "Python, FastAPI, Scheduling",
  "projectChecklist": ["Pull the outage calendar", "Build the planner", "Deploy"],
  "skillsRequired": "I see that these companies use Python and AWS.",
  "markdownReport": "# Load-Shedding Aware Task Scheduler\\n\\n* [ ] Pull the outage calendar"
}"""


class FakeGateway:
    """Stands in for the generative-text service; records what it was asked."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    async def generate(self, prompt, config):
        self.calls.append((prompt, config))
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture(autouse=True)
def isolated_telemetry(tmp_path, monkeypatch):
    monkeypatch.setattr("telemetry.logger.DB_PATH", str(tmp_path / "telemetry.sqlite3"))
    return tmp_path / "telemetry.sqlite3"


@pytest.fixture
def fenced_response():
    return GatewayResponse(
        text=f"```json\n{RECOMMENDATION_JSON}\n```",
        grounding_html="<div>search chips</div>",
        web_search_queries=["software engineer internship cape town skills"],
    )


@pytest.fixture
def postings():
    return [
        JobPosting(
            job_id="a1",
            employer_name="Takealot",
            job_title="Software Engineering Intern",
            job_description="Join our graduate programme.",
            job_apply_link="https://example.com/a1",
            job_city="Cape Town",
            job_country="ZA",
        ),
        JobPosting(
            job_id="b2",
            employer_name="Luno",
            job_title="Junior Backend Developer",
            job_description=None,
            job_city="Cape Town",
            job_country="ZA",
        ),
    ]


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def recommendation_json():
    return RECOMMENDATION_JSON
