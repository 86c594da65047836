import pytest


def nvd_entry(
    cve_id: str = "CVE-2024-0001",
    v40=(),
    v31=(),
    v2=(),
    descriptions=(("en", "A critical flaw in ExampleServer allows remote code execution."),),
    published: str = "2024-06-01T12:15:09.557",
) -> dict:
    """Build one item of an NVD CVE API 2.0 ``vulnerabilities`` list."""
    def metrics(scores):
        return [{"source": "nvd@nist.gov", "cvssData": {"baseScore": score}} for score in scores]

    return {
        "cve": {
            "id": cve_id,
            "published": published,
            "descriptions": [{"lang": lang, "value": value} for lang, value in descriptions],
            "metrics": {
                "cvssMetricV40": metrics(v40),
                "cvssMetricV31": metrics(v31),
                "cvssMetricV2": metrics(v2),
            },
        }
    }


ACME_RESPONSE = (
    '<response><thinking>x</thinking>'
    '<company name="Acme" address="1 Rd" addressLineTwo="" city="Springfield" '
    'state="IL" country="US" zip="00000"></company></response>'
)


@pytest.fixture
def make_entry():
    return nvd_entry


@pytest.fixture
def acme_response() -> str:
    return ACME_RESPONSE
