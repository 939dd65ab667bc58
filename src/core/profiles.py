from dataclasses import dataclass


@dataclass(frozen=True)
class BriefingProfile:
    """
    Declarative output bounds for one retrieval pipeline.
    """
    name: str
    description: str
    post_limit: int
    account_limit: int


INTERACTIVE_BROWSER = BriefingProfile(
    name="browser",
    description="Logged-in browser session scrolling the feed and notifications",
    post_limit=6,
    account_limit=2,
)

REMOTE_TASK = BriefingProfile(
    name="remote",
    description="Remote browser agent returning a JSON payload",
    post_limit=10,
    account_limit=3,
)


ALL_PROFILES = {
    INTERACTIVE_BROWSER.name: INTERACTIVE_BROWSER,
    REMOTE_TASK.name: REMOTE_TASK,
}
