"""
Pytest configuration for async tests.
"""
from datetime import date, datetime, time

import pytest

from applyflow.form.models import CvFile, FieldName, JobDescriptor

# Configure pytest to use asyncio
pytest_plugins = ('pytest_asyncio',)


@pytest.fixture
def sample_job():
    """Create a job with all four screening questions and a deadline."""
    return JobDescriptor(
        job_id="job_1",
        title="Senior Frontend Developer",
        company="Acme Corporation",
        department="Engineering",
        location="San Francisco, CA",
        requirements="5+ years React experience, TypeScript",
        question1="What's your experience with React and state management?",
        question2="Describe a project you led from design to deployment",
        question3="How do you approach testing in your frontend projects?",
        question4="Tell us about your experience with TypeScript",
        close_date=date(2026, 12, 31),
        close_time=time(23, 59),
    )


@pytest.fixture
def before_deadline():
    """Instant well before the sample job closes."""
    return datetime(2026, 10, 18, 9, 30)


@pytest.fixture
def personal_info():
    """Valid values for every personal info field."""
    return {
        FieldName.FULL_NAME: "Jane Doe",
        FieldName.EMAIL: "jane@example.com",
        FieldName.PHONE: "555-123-4567",
        FieldName.CV: CvFile(name="resume.pdf", size=2048),
    }
