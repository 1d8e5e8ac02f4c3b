"""API layer for character recognition.

This module provides the service layer consumed by the drawing front end.
RecognitionService sequences preprocessing, template lookup, similarity
scoring and confidence calibration, and never lets an unexpected failure
escape a recognition call.

Example usage:
    Recognize a drawing::

        from stroke_recognition.api import RecognitionService

        service = RecognitionService()
        result = await service.recognize_character(drawing, 'あ')
        if result.recognized:
            print(f"Recognized with confidence {result.confidence:.2f}")

    Child-friendly recognition::

        result = await service.recognize_character_for_child(drawing, 'く')
        print(result.details['encouragement_level'])
"""

from .services import RecognitionService

__all__ = ['RecognitionService']
