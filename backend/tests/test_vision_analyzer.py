"""
Tests for VisionImageAnalyzer using real Vision message types and a fake client.
"""

import google.auth
import pytest
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import vision

from describer.core.errors import ImageAnalysisError
from describer.services import vision as vision_service
from describer.services.vision import VisionImageAnalyzer, summarize_annotations

IMAGE_URL = "https://example.com/image.jpg"


class FakeVisionClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.requests = []

    async def batch_annotate_images(self, requests):
        self.requests.extend(requests)
        if self.error:
            raise self.error
        return vision.BatchAnnotateImagesResponse(responses=[self.result])


def _color(red, green, blue):
    return vision.ColorInfo(color={"red": red, "green": green, "blue": blue})


def _full_response():
    return vision.AnnotateImageResponse(
        label_annotations=[
            vision.EntityAnnotation(description="shirt"),
            vision.EntityAnnotation(description="cotton"),
        ],
        localized_object_annotations=[vision.LocalizedObjectAnnotation(name="Clothing")],
        image_properties_annotation=vision.ImageProperties(
            dominant_colors=vision.DominantColorsAnnotation(colors=[_color(255, 255, 255)])
        ),
        text_annotations=[vision.EntityAnnotation(description="Brand Name")],
        web_detection=vision.WebDetection(
            web_entities=[vision.WebDetection.WebEntity(description="Fashion")]
        ),
    )


@pytest.mark.asyncio
async def test_analyze_summarizes_all_detectors():
    client = FakeVisionClient(result=_full_response())

    analysis = await VisionImageAnalyzer(client).analyze(IMAGE_URL)

    assert analysis.model_dump(by_alias=True) == {
        "labels": "shirt, cotton",
        "objects": "Clothing",
        "colors": ["255, 255, 255"],
        "detectedText": "Brand Name",
        "webEntities": "Fashion",
    }

    request = client.requests[0]
    assert request.image.source.image_uri == IMAGE_URL
    requested = {feature.type_ for feature in request.features}
    assert vision.Feature.Type.WEB_DETECTION in requested
    assert vision.Feature.Type.OBJECT_LOCALIZATION in requested


@pytest.mark.asyncio
async def test_analyze_uses_fallbacks_when_nothing_detected():
    analysis = await VisionImageAnalyzer(
        FakeVisionClient(result=vision.AnnotateImageResponse())
    ).analyze(IMAGE_URL)

    assert analysis.labels == "No labels detected"
    assert analysis.objects == "No objects detected"
    assert analysis.colors == ["No colors detected"]
    assert analysis.detected_text == "No text detected"
    assert analysis.web_entities == "No web entities detected"


def test_colors_and_web_entities_are_capped():
    result = vision.AnnotateImageResponse(
        image_properties_annotation=vision.ImageProperties(
            dominant_colors=vision.DominantColorsAnnotation(
                colors=[_color(127.5, 12.4, 0), _color(1, 2, 3), _color(4, 5, 6), _color(7, 8, 9)]
            )
        ),
        web_detection=vision.WebDetection(
            web_entities=[vision.WebDetection.WebEntity(description=f"e{i}") for i in range(7)]
        ),
    )

    analysis = summarize_annotations(result)

    assert analysis.colors == ["128, 12, 0", "1, 2, 3", "4, 5, 6"]
    assert analysis.web_entities == "e0, e1, e2, e3, e4"


@pytest.mark.asyncio
async def test_client_error_becomes_image_analysis_error():
    client = FakeVisionClient(error=RuntimeError("Vision AI failed"))

    with pytest.raises(ImageAnalysisError, match="Vision AI failed"):
        await VisionImageAnalyzer(client).analyze(IMAGE_URL)


@pytest.mark.asyncio
async def test_per_image_error_is_raised():
    result = vision.AnnotateImageResponse(error={"code": 3, "message": "Bad image data."})

    with pytest.raises(ImageAnalysisError, match="Bad image data."):
        await VisionImageAnalyzer(FakeVisionClient(result=result)).analyze(IMAGE_URL)


def test_from_settings_does_not_build_client(monkeypatch):
    def fail(**kwargs):
        raise AssertionError("client built at construction time")

    monkeypatch.setattr(vision, "ImageAnnotatorAsyncClient", fail)

    analyzer = VisionImageAnalyzer.from_settings(
        project_id="demo-project", api_endpoint="eu-vision.googleapis.com"
    )

    assert analyzer.client_options == {
        "quota_project_id": "demo-project",
        "api_endpoint": "eu-vision.googleapis.com",
    }


@pytest.mark.asyncio
async def test_missing_credentials_become_image_analysis_error(monkeypatch):
    def no_credentials(**kwargs):
        raise DefaultCredentialsError("Your default credentials were not found.")

    monkeypatch.setattr(vision, "ImageAnnotatorAsyncClient", no_credentials)

    with pytest.raises(ImageAnalysisError, match="default credentials were not found"):
        await VisionImageAnalyzer.from_settings().analyze(IMAGE_URL)


@pytest.mark.asyncio
async def test_client_is_built_once_on_first_use(monkeypatch):
    built = []

    def factory(**kwargs):
        built.append(kwargs)
        return FakeVisionClient(result=_full_response())

    monkeypatch.setattr(vision, "ImageAnnotatorAsyncClient", factory)
    analyzer = VisionImageAnalyzer.from_settings(project_id="demo-project")

    await analyzer.analyze(IMAGE_URL)
    await analyzer.analyze(IMAGE_URL)

    assert built == [{"client_options": {"quota_project_id": "demo-project"}}]


def test_credentials_check_reports_missing_adc(monkeypatch):
    def no_credentials(*args, **kwargs):
        raise DefaultCredentialsError("not found")

    monkeypatch.setattr(google.auth, "default", no_credentials)

    assert vision_service.vision_credentials_available() is False
