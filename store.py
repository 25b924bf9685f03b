import json
from typing import List, Optional

from loguru import logger
from passlib.exc import PasswordSizeError
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from auth import hash_password, verify_password
from config import DEFAULT_ROLE
from errors import DuplicateAccount, InvalidCredentials, StorageError, ValidationError
from models import Account
from validators import RegistrationForm


def serialize_skills(skills) -> str:
    """Encode a skill list for the `skills` column."""
    return json.dumps(list(skills or []))


def deserialize_skills(raw: Optional[str]) -> List[str]:
    """Decode the `skills` column. Null or empty values become an empty list."""
    if not raw:
        return []
    return list(json.loads(raw))


def to_public(account: Account) -> dict:
    """Wire form of an account. The password hash is never included."""
    return {
        "id": account.id,
        "username": account.username,
        "firstName": account.first_name,
        "lastName": account.last_name,
        "email": account.email,
        "role": account.role,
        "skills": deserialize_skills(account.skills),
        "linkedinProfile": account.linkedin_profile,
        "githubProfile": account.github_profile,
        "createdAt": account.created_at.isoformat() if account.created_at else None,
    }


class AccountStore:
    """
    Owns the accounts table and runs the registration and login transactions.

    Uniqueness of username and email is enforced by table constraints; the
    lookup before insert only gives the common case a clean early exit.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, account_id: int) -> Optional[Account]:
        return self.db.query(Account).filter(Account.id == account_id).first()

    def list_by_role(self, role: str) -> List[dict]:
        try:
            rows = (
                self.db.query(Account)
                .filter(Account.role == role)
                .order_by(Account.created_at.asc(), Account.id.asc())
                .all()
            )
        except SQLAlchemyError:
            logger.exception("Failed to list accounts with role {}", role)
            raise StorageError("Could not load profiles")
        return [to_public(row) for row in rows]

    def register(self, form: RegistrationForm) -> dict:
        """
        Create an account from an already validated form and return it.

        Raises DuplicateAccount when the username or email is taken,
        ValidationError when the password is too long to hash, and
        StorageError on any other database failure. Nothing is written in
        any of these cases.
        """
        try:
            existing = (
                self.db.query(Account.id)
                .filter(or_(Account.username == form.username, Account.email == form.email))
                .first()
            )
            if existing:
                logger.info("Signup rejected, username or email taken: {}", form.username)
                raise DuplicateAccount("Username or email already exists")

            account = Account(
                username=form.username,
                password=hash_password(form.password),
                first_name=form.first_name,
                last_name=form.last_name,
                email=form.email,
                role=(form.role or "").strip() or DEFAULT_ROLE,
                skills=serialize_skills(form.skills),
                linkedin_profile=form.linkedin_profile or None,
                github_profile=form.github_profile or None,
            )
            self.db.add(account)
            self.db.commit()
            new_id = account.id

            # Re-read so server-side defaults (createdAt) are populated.
            self.db.expire_all()
            created = self.get(new_id)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same username/email.
            self.db.rollback()
            logger.info("Signup hit unique constraint for {}", form.username)
            raise DuplicateAccount("Username or email already exists")
        except PasswordSizeError as exc:
            self.db.rollback()
            raise ValidationError(f"Password must be at most {exc.max_size} characters")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Signup failed for {}", form.username)
            raise StorageError("Error during signup")

        logger.info("Registered account {} ({}) as {}", created.id, created.username, created.role)
        return to_public(created)

    def login(self, username: str, password: str) -> dict:
        """
        Return the account matching the credentials.

        Raises InvalidCredentials without saying whether the username exists.
        """
        try:
            account = self.db.query(Account).filter(Account.username == username).first()
        except SQLAlchemyError:
            logger.exception("Login lookup failed for {}", username)
            raise StorageError("Login error")

        stored_hash = account.password if account is not None else None
        if not verify_password(password, stored_hash):
            logger.info("Failed login for {}", username)
            raise InvalidCredentials("Invalid username or password")

        return to_public(account)
