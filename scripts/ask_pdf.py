"""
Ask a question about a document's text through a running API server.

Usage:
    python scripts/ask_pdf.py document.txt "What is the candidate's email?"

Requirements:
    - API server must be running
    - The document must already be extracted to plain text
"""

import argparse
import sys
from typing import Dict, Optional

import httpx


def ask_question(
    resume: str,
    question: str,
    document_id: Optional[str] = None,
    base_url: str = "http://localhost:8000",
    timeout: float = 120.0,
) -> httpx.Response:
    """Post a question and the document text to the query endpoint."""
    payload: Dict[str, str] = {"question": question, "resume": resume}
    if document_id:
        payload["document_id"] = document_id

    with httpx.Client(timeout=timeout) as client:
        return client.post(f"{base_url}/api/query-pdf", json=payload)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Ask a question about a document")
    parser.add_argument("document", help="Path to the extracted document text")
    parser.add_argument("question", help="Question to ask")
    parser.add_argument("--document-id", default=None, help="Vector store key for the document")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Base URL of the API")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds")
    args = parser.parse_args(argv)

    with open(args.document, "r", encoding="utf-8") as f:
        resume = f.read()

    try:
        response = ask_question(
            resume=resume,
            question=args.question,
            document_id=args.document_id,
            base_url=args.base_url,
            timeout=args.timeout,
        )
    except httpx.HTTPError as e:
        print(f"API request error: {str(e)}", file=sys.stderr)
        return 1

    data = response.json()
    if response.status_code != 200:
        print(f"Error ({response.status_code}): {data.get('error', response.text)}", file=sys.stderr)
        return 1

    print(data["answer"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
