"""Job identifier generation."""

import os

JOB_ID_BYTES = 8


def generate_job_id() -> str:
    """Generate a random job ID (16 lowercase hex characters).

    Draws from the OS CSPRNG; if the entropy source fails the OSError
    propagates rather than yielding a predictable ID.
    """
    return os.urandom(JOB_ID_BYTES).hex()
