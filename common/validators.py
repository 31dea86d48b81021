import re
from typing import Dict, Optional

from common.errors import ComplaintValidationError, MediaSelectionError
from common.models import ComplaintForm

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

MIN_DESCRIPTION_LEN = 10
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
ALLOWED_MEDIA_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/jpg",
    "video/mp4",
    "video/quicktime",
})

def validate_complaint(form: ComplaintForm) -> Dict[str, str]:
    """
    Field name -> message for every rule the form breaks. Empty dict means
    the form can be submitted. Keys are the wire field names.
    """
    errs: Dict[str, str] = {}

    description = (form.description or "").strip()
    if not description:
        errs["description"] = "Description is required"
    elif len(description) < MIN_DESCRIPTION_LEN:
        errs["description"] = f"Description must be at least {MIN_DESCRIPTION_LEN} characters"

    # optional, but must look like an address when given
    if form.contact_email and not EMAIL_RE.search(form.contact_email):
        errs["contactEmail"] = "Please enter a valid email address"

    if not form.consent_given:
        errs["consentGiven"] = "You must consent to submit personal media"

    return errs

def check_media(media_type: Optional[str], byte_size: Optional[int]) -> Optional[MediaSelectionError]:
    """The reason a picked file can't be attached, or None when it can."""
    if media_type not in ALLOWED_MEDIA_TYPES:
        return MediaSelectionError("Invalid File Type", "Please select only images (JPEG, PNG) or videos (MP4, MOV)")
    if (byte_size or 0) > MAX_FILE_SIZE:
        return MediaSelectionError("File Too Large", "Please select files smaller than 10MB")
    return None

def ensure_valid(form: ComplaintForm) -> None:
    errs = validate_complaint(form)
    if errs:
        raise ComplaintValidationError(errs)
