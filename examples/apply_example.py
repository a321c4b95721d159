"""
Example script walking one candidate through an application.

Optional environment variables in .env:
- APPLYFLOW_STORAGE_DIR: Directory holding jobs.json and applications.jsonl
- APPLYFLOW_CONTACT_EMAIL: Recruiter contact shown when a job has closed
- APPLYFLOW_LOG_LEVEL: Log level (default: INFO)
- APPLYFLOW_LOG_FILE: Optional log file path
"""
import asyncio
from datetime import date, time

from applyflow.form.errors import IncompleteAnswersError
from applyflow.form.models import CvFile, FieldName, JobDescriptor
from applyflow.form.state import ClosedState, SucceededState
from applyflow.form.validators import CV_ACCEPT_ATTRIBUTE
from applyflow.form.views import closed_message, review_summary, success_message, visible_error
from applyflow.interfaces.interface import ApplicationSession
from applyflow.storage.json_store import JsonJobStore
from applyflow.utils.config import Config
from applyflow.utils.logger import setup_logger


async def main():
    config = Config(".env")
    setup_logger("applyflow", config.log_file, config.log_level)

    # Make sure there is a job to apply to
    JsonJobStore(str(config.storage_dir)).add_job("frontend-1", JobDescriptor(
        title="Senior Frontend Developer",
        company="Acme Corporation",
        department="Engineering",
        location="San Francisco, CA",
        requirements="5+ years React experience, TypeScript, strong communication skills",
        question1="What's your experience with React and state management?",
        question2="Describe your experience leading a project from design to deployment",
        close_date=date(2030, 12, 31),
        close_time=time(23, 59),
    ))

    session = ApplicationSession.from_config("frontend-1", config)
    state = await session.load()
    if isinstance(state, ClosedState):
        print(closed_message(state, config.contact_email))
        return

    # Step 1: a mistake, then the fix
    session.change(FieldName.FULL_NAME, "Jane Doe")
    session.change(FieldName.EMAIL, "jane@example")
    session.change(FieldName.PHONE, "+1 (555) 123-4567")
    session.change(FieldName.CV, CvFile(name="jane_doe_resume.pdf", size=183_204))
    state = session.next_step()
    print(f"Still on step {state.step.value}: {visible_error(state, FieldName.EMAIL)}")
    session.change(FieldName.EMAIL, "jane@example.com")
    session.next_step()
    print(f"CV picker accepts: {CV_ACCEPT_ATTRIBUTE}")

    # Step 2: answer only the first question and move to review
    session.change(FieldName.ANSWER1, "Five years of React with Redux and Zustand.")
    state = session.next_step()
    print(f"Review: {review_summary(state)}")

    try:
        await session.submit()
    except IncompleteAnswersError as e:
        print(f"{e} (missing: {list(e.missing_slots)})")

    session.previous_step()
    session.change(FieldName.ANSWER2, "Led the checkout rewrite from mockups to launch.")
    session.next_step()
    state = await session.submit()

    if isinstance(state, SucceededState):
        print(success_message(state))
    else:
        print(f"Submission failed: {state.reason}")


if __name__ == "__main__":
    asyncio.run(main())
