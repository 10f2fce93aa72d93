"""Application constants."""


class SortKeys:
    """Allowed sort keys for the job list."""

    UPDATED_DESC = "updated_desc"
    UPDATED_ASC = "updated_asc"
    CREATED_DESC = "created_desc"
    CREATED_ASC = "created_asc"
    COMPANY_ASC = "company_asc"
    COMPANY_DESC = "company_desc"

    DEFAULT = UPDATED_DESC


class Messages:
    """Common user-facing messages."""

    COMPANY_ROLE_REQUIRED = "Company and role are required"
    COMPANY_EMPTY = "Company cannot be empty"
    ROLE_EMPTY = "Role cannot be empty"
    INVALID_JSON = "Request body must be a JSON object"
    INVALID_NEXT_ACTION_AT = "nextActionAt must be a valid date/time"
    JOB_NOT_FOUND = "Job not found: {job_id}"
    STORE_FAILURE = "Something went wrong while accessing the job store."
    UNEXPECTED_ERROR = "Unexpected server error."
    LOAD_FAILED = "Failed to load jobs. Check your API route and database connection."


DEMO_JOBS = [
    {"company": "IONOS", "role": "Junior Web Developer", "status": "APPLIED", "notes": "Applied via careers page."},
    {"company": "BBC", "role": "Frontend Developer", "status": "SAVED", "notes": "Tailor CV + cover letter."},
    {"company": "Autotrader", "role": "Software Engineer", "status": "INTERVIEW", "notes": "Prep: React + APIs."},
]
