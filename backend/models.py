from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Literal, Optional
from urllib.parse import urlparse

def validate_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)

ProgressStatus = Literal["idle", "running", "completed", "error", "paused"]

class ScrapingOptions(BaseModel):
    max_results: int = Field(10, ge=1)
    extraction_level: int = Field(2, ge=1, le=3)
    timeout: int = Field(30000, gt=0)  # navigation timeout, ms
    check_reachability: bool = False

class ScrapingRequest(BaseModel):
    type: Literal["query", "urls"]
    query: Optional[str] = None
    urls: Optional[List[str]] = None
    options: ScrapingOptions = Field(default_factory=ScrapingOptions)

    @field_validator("urls")
    @classmethod
    def strip_blank_urls(cls, urls):
        if urls is None:
            return None
        return [u.strip() for u in urls if u and u.strip()]

    @model_validator(mode="after")
    def check_choice(self):
        if self.type == "query":
            if not self.query or not self.query.strip():
                raise ValueError("Please enter a search query")
        else:
            if not self.urls:
                raise ValueError("Please enter at least one URL")
            invalid = [u for u in self.urls if not validate_url(u)]
            if invalid:
                raise ValueError(f"Invalid URLs: {', '.join(invalid)}")
        return self

class SocialMedia(BaseModel):
    linkedin: str = ""
    twitter: str = ""
    facebook: str = ""

class CompanyData(BaseModel):
    id: str
    company_name: str
    website_url: str
    email: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    founded_year: Optional[str] = None
    employee_size: Optional[str] = None
    social_media: Optional[SocialMedia] = None
    tech_stack: Optional[List[str]] = None
    extracted_at: str
    source_url: str
    confidence: float

    def to_dict(self) -> dict:
        # Fields the extraction level never touched are left out entirely.
        return self.model_dump(exclude_none=True)

class ScrapingProgress(BaseModel):
    total_urls: int = 0
    processed_urls: int = 0
    successful_extractions: int = 0
    errors: int = 0
    current_url: str = ""
    status: ProgressStatus = "idle"

class StopResponse(BaseModel):
    success: bool
    message: str

class ExportRequest(BaseModel):
    results: List[CompanyData]
    filter: Optional[str] = None
    sort_by: str = "company_name"
