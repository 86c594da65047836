"""
Structured response parsing for the company advisor.

The model is asked to answer with an XML document shaped like
CompanyPrompts.EXAMPLE_RESPONSE: a <response> root holding a <thinking>
element and a <company> element whose identity and address are carried
as attributes. Parsing fails closed; a reply that does not have that
shape never yields a partial StructuredResponse.
"""

import xml.etree.ElementTree as ET

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MalformedResponse

ROOT_TAG = "response"
THINKING_TAG = "thinking"
COMPANY_TAG = "company"

# XML attribute -> CompanyIdentity field
REQUIRED_ATTRIBUTES: dict[str, str] = {
    "name": "name",
    "address": "address",
    "city": "city",
    "country": "country",
}
OPTIONAL_ATTRIBUTES: dict[str, str] = {
    "addressLineTwo": "address_line_two",
    "state": "state",
    "zip": "zip",
}
# CompanyIdentity field -> XML attribute, for error messages
ATTRIBUTE_NAMES: dict[str, str] = {
    field: attr for attr, field in {**REQUIRED_ATTRIBUTES, **OPTIONAL_ATTRIBUTES}.items()
}


class CompanyIdentity(BaseModel):
    """The company picked by the model and where to ship to."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1, description="Street line one")
    address_line_two: str = Field(default="", description="Street line two, may be empty")
    city: str = Field(..., min_length=1)
    state: str = Field(default="", description="Region, state or province")
    zip: str = Field(default="", description="Postal code")
    country: str = Field(..., min_length=1)


class StructuredResponse(BaseModel):
    """Validated model reply."""

    thinking: str = Field(default="", description="Free-form reasoning, informational only")
    company: CompanyIdentity


def parse_response(raw_text: str) -> StructuredResponse:
    """
    Parse the model's raw reply into a StructuredResponse.

    Raises:
        MalformedResponse: If the text is not well-formed XML, the root is
            not <response>, the <company> element is missing, or one of
            name/address/city/country is missing or blank.
    """
    text = (raw_text or "").strip()
    if not text:
        raise MalformedResponse("model returned an empty response")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedResponse(f"response is not well-formed XML: {exc}") from exc

    if root.tag != ROOT_TAG:
        raise MalformedResponse(f"expected <{ROOT_TAG}> root element, got <{root.tag}>")

    company = root.find(COMPANY_TAG)
    if company is None:
        raise MalformedResponse(f"response has no <{COMPANY_TAG}> element")

    fields = {field: company.get(attr, "") for attr, field in REQUIRED_ATTRIBUTES.items()}
    fields.update({field: company.get(attr, "") for attr, field in OPTIONAL_ATTRIBUTES.items()})

    thinking = root.find(THINKING_TAG)
    thinking_text = "".join(thinking.itertext()).strip() if thinking is not None else ""

    try:
        identity = CompanyIdentity(**fields)
    except ValidationError as exc:
        invalid = [ATTRIBUTE_NAMES.get(str(error["loc"][0]), str(error["loc"][0])) for error in exc.errors()]
        raise MalformedResponse(
            f"<{COMPANY_TAG}> is missing required attributes: {', '.join(invalid)}"
        ) from exc

    return StructuredResponse(thinking=thinking_text, company=identity)
