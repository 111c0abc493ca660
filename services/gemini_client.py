from __future__ import annotations

import os
import re
from typing import Any, Iterable, List, Optional

from google import genai  # type: ignore
from google.genai import types  # type: ignore

from models.blog_post import BlogPostContent
from src.utils.text import truncate

# Transcripts longer than this are cut before being sent to the model.
MAX_TRANSCRIPT_CHARS = 10000


class GeminiClient:
    """Cliente simples para o Gemini API (Google Gen AI), apenas texto.

    - Lê a chave da API de `GOOGLE_API_KEY` por padrão.
    - Focado em geração de conteúdo via `models.generate_content`.
    - `client` permite injetar um cliente já construído (útil em testes).

    Exemplo rápido:
        from services.gemini_client import GeminiClient

        client = GeminiClient()
        result = client.generate(["Resuma em 1 frase: ..."])
        print(result["text"])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
        http_options: Optional[dict] = None,
        *,
        client: Any = None,
        temperature: float = 0.7,
    ) -> None:
        self.model = model
        self.temperature = temperature

        if client is not None:
            self.client = client
            return

        # Obtém chave de API do argumento ou do ambiente
        key = api_key or os.getenv("GOOGLE_API_KEY")
        if not key:
            raise ValueError(
                "Set the GOOGLE_API_KEY environment variable or pass api_key explicitly."
            )

        if http_options:
            self.client = genai.Client(api_key=key, http_options=http_options)
        else:
            self.client = genai.Client(api_key=key)

    # ------------------------- API PÚBLICA -------------------------
    def generate(self, inputs: Iterable[str], *, model: Optional[str] = None) -> dict:
        """Gera conteúdo (não streaming) a partir de textos.

        Retorna dict com chaves: {"text": str, "raw": response}.
        """
        response = self.client.models.generate_content(
            model=model or self.model,
            contents=list(inputs),
            config=types.GenerateContentConfig(temperature=self.temperature),
        )
        return {"text": getattr(response, "text", None) or "", "raw": response}


_BLOG_PROMPT = """
You are a professional outdoor adventure blogger and content creator. Convert the following YouTube video transcript into a well-structured, engaging blog post.

Title: "{title}"

Transcript:
{transcript}

Guidelines:
1. Write in a conversational, enthusiastic tone that engages outdoor enthusiasts
2. Format with proper headings, paragraphs, and bullet points where appropriate
3. Include an introduction and conclusion
4. Remove filler words, repetitions, and informal speech patterns from the transcript
5. Length should be 800-1500 words
6. Use markdown formatting for structure

Please generate only the blog post content.
"""

_SUMMARY_PROMPT = """
Create a concise, compelling excerpt (120-150 words) for the following blog post about outdoor adventures:

{excerpt}...

The excerpt should capture the main topic, appeal to outdoor enthusiasts and be complete and standalone.
"""

_TAGS_PROMPT = """
Based on the following blog post about outdoor activities, generate 5-8 relevant tags or keywords.
These tags should be single words or short phrases that accurately represent the main topics of the content.

{excerpt}...

Format your response as a simple comma-separated list of tags, with no additional text or explanation.
"""

_IDEAS_PROMPT = """
Generate {count} engaging blog post ideas about "{topic}" for an outdoor adventure blog.

For each idea, provide a compelling title that would attract readers interested in outdoor activities.

Format your response as a simple numbered list with just the titles.
"""


class TranscriptBlogWriter:
    """Turns video transcripts into blog content using :class:`GeminiClient`."""

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    def convert_transcript_to_blog_post(
        self,
        title: str,
        transcript: str,
        *,
        include_summary: bool = True,
        generate_tags: bool = True,
    ) -> BlogPostContent:
        if not transcript or not transcript.strip():
            raise ValueError(f"Video {title!r} has no transcript to convert")

        body = truncate(transcript, MAX_TRANSCRIPT_CHARS, " ... (transcript truncated)")
        content = self._ask(_BLOG_PROMPT.format(title=title, transcript=body))
        if not content:
            raise ValueError(f"Gemini returned no content for {title!r}")

        excerpt = content[:1000]
        if include_summary:
            summary = self._ask(_SUMMARY_PROMPT.format(excerpt=excerpt))
        else:
            # first paragraph stands in for the summary
            first = content.split("\n\n")[0].strip()
            summary = truncate(first, 300)

        tags: List[str] = []
        if generate_tags:
            tags = [t.strip() for t in self._ask(_TAGS_PROMPT.format(excerpt=excerpt)).split(",") if t.strip()]

        return BlogPostContent(content=content, summary=summary, tags=tags)

    def generate_blog_post_ideas(self, topic: str, count: int = 5) -> List[str]:
        text = self._ask(_IDEAS_PROMPT.format(topic=topic, count=count))
        ideas = []
        for line in text.splitlines():
            line = re.sub(r"^\d+[.\s-]*\s*", "", line.strip()).strip()
            if line:
                ideas.append(line)
        return ideas[:count]

    def _ask(self, prompt: str) -> str:
        return (self.client.generate([prompt])["text"] or "").strip()
