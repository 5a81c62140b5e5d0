from pathlib import Path
from typing import BinaryIO, List, Union
import logging

from pypdf import PdfReader

logger = logging.getLogger(__name__)

FALLBACK_TEXT = """
Frequently Asked Questions

Q: What is this chatbot?
A: This is an AI-powered chatbot that can answer questions based on PDF documents using local language models.

Q: How does it work?
A: The chatbot splits the document into chunks, finds the passages most related to your question and answers only from those passages.

Q: Is my data secure?
A: Yes! With the local model backend everything runs on your own machine. No data is sent to external servers.

Q: What kind of questions can I ask?
A: You can ask any questions related to the content of the PDF document. The AI will search through the document and provide relevant answers.

Q: How accurate are the responses?
A: The accuracy depends on the quality of the PDF content and how well your question relates to the information in the document.

Q: Can I use this with different PDF files?
A: Yes, the chatbot can be pointed at a different PDF file when it is started.

Q: Does this require an internet connection?
A: After the models are downloaded once, the chatbot can work offline as all processing is done locally.
"""


def extract_text_per_page(fileobj: Union[BinaryIO, str, Path]) -> List[str]:
    reader = PdfReader(fileobj)
    pages: List[str] = []
    for page_num, page in enumerate(reader.pages, start=1):
        try:
            text = page.extract_text() or ""
        except Exception as e:
            logger.warning(f"Error extracting text from page {page_num}: {e}")
            continue
        pages.append(" ".join(text.split()))
    return pages


def extract_text(source: Union[BinaryIO, str, Path]) -> str:
    """Extract the whole document as one text blob.

    Pages are separated by blank lines. If the document cannot be read at
    all, the built-in sample FAQ is returned instead so the assistant stays
    usable offline.
    """
    try:
        logger.info(f"Loading PDF from: {source}")
        pages = extract_text_per_page(source)
    except Exception as e:
        logger.warning(f"Error extracting text from PDF, using fallback sample text: {e}")
        return FALLBACK_TEXT

    full_text = "\n\n".join(p for p in pages if p.strip())
    logger.info(f"Total text extracted: {len(full_text)} characters from {len(pages)} pages")
    return full_text
