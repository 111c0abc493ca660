#!/usr/bin/env python3

import argparse
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from services.gemini_client import GeminiClient, TranscriptBlogWriter
from src.config import DEFAULT_CONFIG_FILE, load_config


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate blog post title ideas for an outdoor topic with Gemini"
    )
    parser.add_argument("topic", help="Topic, e.g. 'winter camping'")
    parser.add_argument("--count", type=int, default=5, help="Number of ideas (default: 5)")
    parser.add_argument("--config", default=os.path.join(PROJECT_ROOT, DEFAULT_CONFIG_FILE))
    args = parser.parse_args()

    cfg = load_config(config_file=args.config)["gemini"]
    writer = TranscriptBlogWriter(GeminiClient(api_key=cfg["api_key"] or None, model=cfg["model"]))
    for i, idea in enumerate(writer.generate_blog_post_ideas(args.topic, args.count), start=1):
        print(f"{i}. {idea}")


if __name__ == "__main__":
    main()
