"""Shared test fixtures."""

from __future__ import annotations

import copy
from unittest.mock import AsyncMock

import pytest

from resume_ats.clients.llm_client import LLMClient, LLMResponse


STRONG_DOCUMENT = {
    "profile": {
        "firstName": "Jane",
        "lastName": "Doe",
        "headline": "Senior Full-Stack Engineer",
        "email": "jane@example.com",
        "phone": "+1 555 0100",
        "location": "Austin, TX",
        "website": "https://janedoe.dev",
        "linkedin": "https://linkedin.com/in/janedoe",
        "github": "https://github.com/janedoe",
    },
    "summary": (
        "Full-stack engineer with 8+ years of experience building scalable web "
        "platforms in Python, React and PostgreSQL. Led teams of 6 engineers and "
        "shipped products used by 2 million customers."
    ),
    "experience": [
        {
            "title": "Staff Engineer",
            "company": "Paystream",
            "startDate": "2020-01",
            "current": True,
            "description": (
                "<p>Own the payments platform.</p><ul>"
                "<li>Led migration of 12 services to Kubernetes, reducing deploy time by 60%</li>"
                "<li>Developed a fraud detection API serving 500 clients</li>"
                "<li>Optimized PostgreSQL queries, improving p95 latency by 45%</li>"
                "<li>Mentored 4 engineers and established code review standards</li>"
                "</ul>"
            ),
        },
        {
            "title": "Software Engineer",
            "company": "Brightlane",
            "startDate": "2016-06",
            "endDate": "2019-12",
            "description": (
                "<ul>"
                "<li>Built a React dashboard adopted by 3000 users</li>"
                "<li>Automated CI/CD pipelines with GitHub Actions, saving 10 hours weekly</li>"
                "<li>Designed REST APIs consumed by 8 partner teams</li>"
                "<li>Increased test coverage from 40% to 85% using Jest</li>"
                "<li>Collaborated with product and design to deliver 5 major features on schedule</li>"
                "</ul>"
            ),
        },
    ],
    "projects": [
        {
            "title": "costwatch",
            "description": "Open-source CLI for auditing cloud spend across accounts",
            "repoUrl": "https://github.com/janedoe/costwatch",
            "techStack": ["Python", "Docker"],
        }
    ],
    "education": [
        {
            "institution": "University of Texas",
            "degree": "BSc",
            "fieldOfStudy": "Computer Science",
            "startDate": "2012",
            "endDate": "2016",
        }
    ],
    "certifications": [{"name": "AWS Solutions Architect", "issuer": "Amazon", "date": "2022"}],
    "skills": [
        {"name": "Languages", "skills": ["Python", "TypeScript", "JavaScript", "SQL"]},
        {
            "name": "Frameworks & Tools",
            "skills": ["React", "Django", "Docker", "Kubernetes", "PostgreSQL", "Jest"],
        },
    ],
}

RELEVANCE_DOCUMENT = {
    "profile": {"firstName": "Sam", "lastName": "Lee", "email": "sam@example.com"},
    "experience": [
        {
            "title": "Frontend Engineer",
            "company": "Northwind",
            "startDate": "2021-03",
            "description": (
                "Built and maintained customer-facing web applications with React and "
                "Node. Owned the deployment process to AWS for three product lines, "
                "coordinating releases with the platform group and writing technical "
                "documentation for every service handed over to operations."
            ),
        }
    ],
    "skills": [{"name": "Stack", "skills": ["React", "Node", "TypeScript"]}],
}

PLACEHOLDER_DOCUMENT = {
    "summary": (
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
        "tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, "
        "quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat."
    ),
}


@pytest.fixture
def strong_document() -> dict:
    return copy.deepcopy(STRONG_DOCUMENT)


@pytest.fixture
def relevance_document() -> dict:
    return copy.deepcopy(RELEVANCE_DOCUMENT)


@pytest.fixture
def placeholder_document() -> dict:
    return copy.deepcopy(PLACEHOLDER_DOCUMENT)


@pytest.fixture
def ai_evaluation_json() -> dict:
    return {
        "score": 78,
        "status": "good",
        "feedback": ["Quantify more of your achievements"],
        "summary_suggestion": "Staff engineer with 8+ years shipping payment platforms.",
        "missing_keywords": ["Terraform"],
        "improvement_plan": [{"action": "Add a Terraform project", "impact": "medium"}],
    }


@pytest.fixture
def mock_llm() -> LLMClient:
    """LLMClient with generate/generate_json replaced by AsyncMocks."""
    llm = LLMClient.__new__(LLMClient)
    llm._token_log = []
    llm.generate = AsyncMock(
        return_value=LLMResponse(text="mock response", input_tokens=100, output_tokens=50)
    )
    llm.generate_json = AsyncMock(return_value={})
    return llm
