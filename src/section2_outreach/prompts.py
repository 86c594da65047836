"""
Prompts for Section 2: Outreach

The instruction text and the one-shot example response form the contract
with the model and are kept byte-for-byte, indentation included. Change
them only together with OutreachConfig.PROMPT_VERSION.
"""

from .config import OutreachConfig


class CompanyPrompts:
    """Prompt for identifying the company most affected by a CVE."""

    PROMPT_VERSION = OutreachConfig.PROMPT_VERSION

    EXAMPLE_RESPONSE = """        <response>
            <thinking>
                Because this vulnerability affects PHP, I think that I should focus on large companies that use PHP. I know of a few companies:
                - Facebook: Originally built with PHP, Facebook has developed its own version called Hack, which is a derivative of PHP.
                - Wikipedia: The platform runs on MediaWiki, which is primarily written in PHP.
                - WordPress: While not a company per se, WordPress powers a significant portion of the web and is built on PHP. Many large organizations use WordPress for their websites.
                - Slack: The messaging platform uses PHP for some of its backend services.
                - Tumblr: This microblogging platform is also built using PHP.
                - Mailchimp: The email marketing service utilizes PHP in its backend.
                - Yahoo: Parts of Yahoo's services are built using PHP.
                - Flickr: The photo-sharing platform is another example of a site that uses PHP.
                Facebook is probably the largest company, so I'll give that as my response.
            </thinking>
            <company name="Facebook" address="1 Hacker Way" addressLineTwo="" city="Menlo Park" state="CA" country="US" zip="94025"></company>
        </response>"""

    USER_PROMPT_TEMPLATE = """I am going to give you a description of a severe CVE vulnerability.
        Please describe to me which companies you think are most likely affected by this vulnerability, and choose the most important one.
        We want to send them coffee as a consolation for the stress and effort this new vulnerability is going to place on their engineers.
        So please also include their physical address so that we can send them this coffee!

        Here is an example response. Please format your response similarly, using XML with the same structure. Don't wrap your response in backticks

{example}

        Here is the vulnerability description: {description}
    """


def build_prompt(description: str) -> str:
    """Render the company prompt with ``description`` embedded verbatim."""
    return CompanyPrompts.USER_PROMPT_TEMPLATE.format(
        example=CompanyPrompts.EXAMPLE_RESPONSE,
        description=description,
    )
