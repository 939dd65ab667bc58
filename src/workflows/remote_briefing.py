import json
import logging
from typing import Optional, Sequence

from core.errors import MalformedPayloadError
from core.profiles import REMOTE_TASK, BriefingProfile
from core.schemas import BriefingDocument
from processing.assembler import assemble_from_payload
from processing.payload import MalformedPayload, decode_payload
from services.browser_use import BrowserUseClient
from services.config import Config
from workflows.base import BriefingPipeline

logger = logging.getLogger(__name__)


def build_task_prompt(search_queries: Sequence[str], profile: BriefingProfile = REMOTE_TASK) -> str:
    accounts_query, posts_query = search_queries[0], search_queries[-1]
    posts, accounts = profile.post_limit, profile.account_limit

    return f"""You are a research assistant. Do the following on X (twitter.com) and SuperGrok:

1. Search X/SuperGrok for: "{accounts_query}"
   - From the results, find {accounts} interesting accounts to potentially follow.

2. Search X/SuperGrok for: "{posts_query}"
   - From the results, find {posts} interesting recent tweets worth replying to.

Return your results as STRICT JSON (no markdown fences, no extra text) with this exact shape:

{{
  "posts": [
    {{
      "id": "<tweet id or empty string>",
      "text": "<full tweet text>",
      "authorName": "<display name>",
      "authorHandle": "<handle without @>",
      "likes": <number>,
      "retweets": <number>,
      "replies": <number>,
      "views": <number or 0>,
      "whyInteresting": "<1-sentence reason>",
      "url": "<full tweet URL>"
    }}
  ],
  "accountsToFollow": [
    {{
      "handle": "<handle without @>",
      "name": "<display name>",
      "bio": "<short bio>",
      "followers": <number>,
      "following": <number>,
      "whyFollow": "<1-sentence reason>",
      "url": "<profile URL>"
    }}
  ],
  "methodology": {{
    "searches": {json.dumps(list(search_queries))},
    "plainEnglish": "Searched X and SuperGrok for new accounts followed by mutual connections, and recent tweets by YC founders. Selected {posts} posts with high engagement or good reply opportunities, and {accounts} accounts with relevant overlap."
  }}
}}

posts must have exactly {posts} items. accountsToFollow must have exactly {accounts} items. All number fields must be integers (use 0 if unknown). Return ONLY the JSON object, nothing else."""


class RemoteTaskBriefingPipeline(BriefingPipeline):
    name = REMOTE_TASK.name
    profile = REMOTE_TASK

    def __init__(self, config: Config, client: Optional[BrowserUseClient] = None):
        self.config = config
        self.settings = config.browser_use
        # Fail before any request is made
        self.api_key = config.require_browser_use_key()
        self.client = client

    async def run(self) -> BriefingDocument:
        client = self.client or BrowserUseClient(
            api_key=self.api_key,
            base_url=self.settings.base_url,
        )
        prompt = build_task_prompt(self.settings.search_queries, self.profile)

        async with client:
            session_id = None
            if self.settings.profile_id:
                logger.info(f"Creating Browser Use session with profile {self.settings.profile_id}")
                session_id = await client.create_session(self.settings.profile_id)
                logger.info(f"Session created: {session_id}")

            task_id = await client.create_task(prompt, session_id)
            logger.info(f"Task created: {task_id}")

            output = await client.poll_until_done(
                task_id,
                interval=self.settings.poll_interval,
                max_wait=self.settings.max_wait,
            )

        result = decode_payload(output)
        if isinstance(result, MalformedPayload):
            raise MalformedPayloadError(result.raw_excerpt, result.reason)

        document = assemble_from_payload(
            result.data,
            self.profile,
            default_searches=self.settings.search_queries,
        )
        logger.info(
            f"[{self.name}] {len(document.posts)} posts, "
            f"{len(document.accounts_to_follow)} accounts"
        )
        return document
