from fastapi import HTTPException, UploadFile, status
from api.detection.detection_schema import ClassificationResult
from api.detection.image_classifier import ImageClassifier, InvalidImageError


async def analyze_image_controller(image: UploadFile, classifier: ImageClassifier) -> ClassificationResult:
    data = await image.read()
    try:
        return await classifier.classify(data)
    except InvalidImageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
