"""
Trash detection behind a small capability interface.

``RandomImageClassifier`` is a stand-in: it checks that the bytes decode as an
image, waits a moment, then makes up an answer. A real model only has to
implement ``ImageClassifier.classify``.
"""
import asyncio
import io
import logging
import random
from typing import Optional, Protocol

from PIL import Image

from api.detection.detection_schema import ClassificationResult

logger = logging.getLogger(__name__)

TRASH_KINDS = ["plastic waste", "organic waste", "paper trash", "general litter"]


class InvalidImageError(ValueError):
    """The uploaded bytes are not a decodable image."""


class ImageClassifier(Protocol):
    async def classify(self, image: bytes) -> ClassificationResult:
        ...


def verify_image(image: bytes) -> None:
    if not image:
        raise InvalidImageError("Empty image")
    try:
        with Image.open(io.BytesIO(image)) as img:
            img.verify()
    except (OSError, SyntaxError) as e:
        raise InvalidImageError(f"Not a valid image: {e}") from e


class RandomImageClassifier:
    def __init__(
        self,
        delay_seconds: float = 2.0,
        trash_probability: float = 0.7,
        rng: Optional[random.Random] = None,
    ):
        self.delay_seconds = delay_seconds
        self.trash_probability = trash_probability
        self.rng = rng or random.Random()

    async def classify(self, image: bytes) -> ClassificationResult:
        verify_image(image)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        has_trash = self.rng.random() < self.trash_probability
        if has_trash:
            confidence = round((0.75 + self.rng.random() * 0.2) * 100)
            kind = self.rng.choice(TRASH_KINDS)
            message = f"AI detected trash with {confidence}% confidence. This appears to be {kind}."
        else:
            confidence = round((0.6 + self.rng.random() * 0.3) * 100)
            message = (
                f"AI analysis complete with {confidence}% confidence. No trash detected in this image. "
                "Please upload a photo showing actual trash."
            )

        logger.debug("Classified %d bytes: has_trash=%s confidence=%s", len(image), has_trash, confidence)
        return ClassificationResult(has_trash=has_trash, confidence=confidence, message=message)
