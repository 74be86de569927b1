"""
Google Gemini client for the Page Relay responder.
Single prompt in, single completion out.
"""

import time

import google.generativeai as genai

from page_relay.config import Settings
from page_relay.utils.logging_config import get_logger

logger = get_logger("gemini")


class GenerationError(Exception):
    """Raised when Gemini does not produce usable text"""


class GeminiClient:
    """Client for interacting with Google Gemini AI"""

    def __init__(self, settings: Settings):
        """Initialize the Gemini client"""
        self.model_name = settings.gemini_model
        self.model = None

        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY not found. Replies will use the fallback message.")
            return

        genai.configure(api_key=settings.gemini_api_key)
        self.model = genai.GenerativeModel(self.model_name)
        logger.info(f"Gemini client initialized with model {self.model_name}")

    def generate_response(self, prompt: str) -> str:
        """
        Generate a response using Gemini AI

        Args:
            prompt: The prompt to send to Gemini

        Returns:
            Generated response text

        Raises:
            GenerationError: If the model is not configured or returns no text
        """
        if not self.model:
            raise GenerationError("Gemini model is not configured")

        start_time = time.time()
        response = self.model.generate_content(prompt)

        # response.text raises ValueError when the candidate was blocked
        try:
            text = response.text
        except ValueError as e:
            raise GenerationError(f"Gemini returned no text: {e}") from e

        if not text or not text.strip():
            raise GenerationError("Gemini returned an empty response")

        processing_time = time.time() - start_time
        logger.debug(f"Raw AI response: {text}")
        logger.info(f"Response generated in {processing_time:.2f}s ({len(text)} characters)")

        return text.strip()

    def is_available(self) -> bool:
        """Check if the Gemini client has a configured model"""
        return self.model is not None
