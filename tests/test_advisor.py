import pytest

from src.section2_outreach.advisor import CompanyAdvisor
from src.section2_outreach.errors import MalformedResponse, ModelCallError


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModels:
    def __init__(self, response_text: str | None = "", error: Exception | None = None):
        self.response_text = response_text
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.response_text)


class FakeClient:
    def __init__(self, response_text: str | None = "", error: Exception | None = None):
        self.models = FakeModels(response_text=response_text, error=error)


def test_identify_company_sends_prompt_and_parses_reply(acme_response):
    client = FakeClient(acme_response)
    advisor = CompanyAdvisor(client=client, model="gemini-test")

    result = advisor.identify_company("Buffer overflow in ExampleServer.")

    assert result.company.name == "Acme"
    assert advisor.request_count == 1
    call = client.models.calls[0]
    assert call["model"] == "gemini-test"
    assert "Here is the vulnerability description: Buffer overflow in ExampleServer." in call["contents"]


def test_client_error_becomes_model_call_error():
    advisor = CompanyAdvisor(client=FakeClient(error=RuntimeError("quota exceeded")))

    with pytest.raises(ModelCallError, match="quota exceeded"):
        advisor.identify_company("desc")


def test_empty_reply_becomes_model_call_error():
    advisor = CompanyAdvisor(client=FakeClient(response_text=None))

    with pytest.raises(ModelCallError):
        advisor.identify_company("desc")


def test_unparseable_reply_is_malformed():
    advisor = CompanyAdvisor(client=FakeClient("Sure! The company is Acme."))

    with pytest.raises(MalformedResponse):
        advisor.identify_company("desc")
