# gearshare/utils/retry.py
from sqlalchemy.exc import OperationalError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from gearshare.utils.settings import DB_INIT_RETRIES


def db_retry(attempts: int = DB_INIT_RETRIES):
    # startup only, the database may still be coming up
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type(OperationalError),
    )
