from fastapi import APIRouter, Depends, File, UploadFile

from api.detection.detection_controller import analyze_image_controller
from api.detection.detection_schema import ClassificationResult
from api.detection.image_classifier import ImageClassifier
from utils.deps import get_classifier

router = APIRouter(tags=["Trash Detection"])


@router.post("/analyze", response_model=ClassificationResult, summary="Check a photo for trash")
async def analyze_photo(
    image: UploadFile = File(...),
    classifier: ImageClassifier = Depends(get_classifier),
):
    """
    Returns whether the photo shows trash and how confident the check is.
    Send the result along with the report; a negative one blocks submission.
    """
    return await analyze_image_controller(image, classifier)
