from django import forms
from django.conf import settings
from django.template.defaultfilters import filesizeformat
from django.utils import timezone

from common.utils import ALLOWED_SEASONS, MAX_YEAR, MIN_YEAR, clip, normalize_season

REQUIRED_FIELDS_MESSAGE = "Title, season, and year are required."
IMAGE_ONLY_MESSAGE = "Only image uploads are supported."


def validate_image_upload(upload):
    """Reject non-image content types and files above the upload limit."""
    content_type = getattr(upload, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise forms.ValidationError(IMAGE_ONLY_MESSAGE)
    limit = settings.WILDLIGHT_MAX_UPLOAD_BYTES
    if upload.size > limit:
        raise forms.ValidationError(f"Images must be {filesizeformat(limit)} or smaller.")
    return upload


class PhotoUploadForm(forms.Form):
    photo = forms.ImageField(
        error_messages={
            "required": "Photo file is required.",
            "invalid_image": IMAGE_ONLY_MESSAGE,
            "invalid": IMAGE_ONLY_MESSAGE,
        },
    )
    title = forms.CharField(error_messages={"required": REQUIRED_FIELDS_MESSAGE})
    season = forms.CharField(error_messages={"required": REQUIRED_FIELDS_MESSAGE})
    year = forms.IntegerField(
        error_messages={"required": REQUIRED_FIELDS_MESSAGE, "invalid": REQUIRED_FIELDS_MESSAGE},
    )
    date_taken = forms.CharField(required=False)
    location = forms.CharField(required=False)
    blurb = forms.CharField(required=False)

    # Browser field names that differ from ours
    WIRE_NAMES = {"date_taken": "dateTaken"}

    @classmethod
    def from_request(cls, request) -> "PhotoUploadForm":
        data = {
            name: request.POST.get(cls.WIRE_NAMES.get(name, name), "")
            for name in ("title", "season", "year", "date_taken", "location", "blurb")
        }
        return cls(data, request.FILES)

    def clean_photo(self):
        return validate_image_upload(self.cleaned_data["photo"])

    def clean_title(self):
        title = clip(self.cleaned_data.get("title"), 120)
        if not title:
            raise forms.ValidationError(REQUIRED_FIELDS_MESSAGE)
        return title

    def clean_season(self):
        season = normalize_season(self.cleaned_data.get("season"))
        if season not in ALLOWED_SEASONS:
            raise forms.ValidationError(REQUIRED_FIELDS_MESSAGE)
        return season

    def clean_year(self):
        year = self.cleaned_data.get("year")
        # No later than next year
        latest = min(MAX_YEAR, timezone.localdate().year + 1)
        if year is None or not MIN_YEAR <= year <= latest:
            raise forms.ValidationError(REQUIRED_FIELDS_MESSAGE)
        return year

    def clean_date_taken(self):
        return clip(self.cleaned_data.get("date_taken"), 20)

    def clean_location(self):
        return clip(self.cleaned_data.get("location"), 120)

    def clean_blurb(self):
        return clip(self.cleaned_data.get("blurb"), 2000)


class ProfileForm(forms.Form):
    display_name = forms.CharField(required=False)
    about = forms.CharField(required=False)
    profile_photo = forms.ImageField(
        required=False,
        error_messages={"invalid_image": IMAGE_ONLY_MESSAGE, "invalid": IMAGE_ONLY_MESSAGE},
    )

    @classmethod
    def from_request(cls, request) -> "ProfileForm":
        data = {
            "display_name": request.POST.get("displayName", ""),
            "about": request.POST.get("about", ""),
        }
        files = {}
        if "profilePhoto" in request.FILES:
            files["profile_photo"] = request.FILES["profilePhoto"]
        return cls(data, files)

    def clean_display_name(self):
        return clip(self.cleaned_data.get("display_name"), 80)

    def clean_about(self):
        return clip(self.cleaned_data.get("about"), 1200)

    def clean_profile_photo(self):
        upload = self.cleaned_data.get("profile_photo")
        if not upload:
            return None
        return validate_image_upload(upload)


def first_error(form: forms.Form) -> str:
    """Return the first human-readable validation message of a bound form."""
    for messages in form.errors.values():
        if messages:
            return str(messages[0])
    return "Invalid submission."
