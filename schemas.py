from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from validators import RegistrationForm, parse_skills


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class SignupRequest(BaseModel):
    """
    Body of ``POST /signup``.

    Every field is optional at this level so that missing or empty values
    reach the registration checks and get their specific message.
    ``skills`` normally arrives as a JSON-encoded array string.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(None, alias="confirmPassword")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    role: Optional[str] = None
    skills: Union[str, List[Any], None] = None
    linkedin_profile: Optional[str] = Field(None, alias="linkedinProfile")
    github_profile: Optional[str] = Field(None, alias="githubProfile")

    def to_form(self) -> RegistrationForm:
        """Build the validator input. Raises ValidationError on bad skills."""
        return RegistrationForm(
            username=self.username or "",
            password=self.password or "",
            confirm_password=self.confirm_password,
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            email=self.email or "",
            role=self.role,
            skills=parse_skills(self.skills),
            linkedin_profile=self.linkedin_profile,
            github_profile=self.github_profile,
        )
