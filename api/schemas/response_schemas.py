"""
JSON Schemas sent to the provider as output-format hints.

These mirror Curriculum and Assessment (camelCase keys) but are written out
flat, without $ref, so every Ollama model can compile them to a grammar.
Provider output is still validated against the pydantic models.
"""

_STRING = {"type": "string"}
_NUMBER = {"type": "number"}

LESSON_SCHEMA = {
    "type": "object",
    "properties": {
        "title": _STRING,
        "duration": _STRING,
        "type": {"type": "string", "enum": ["Video", "Text", "Quiz", "Assignment"]},
        "objectives": {"type": "array", "items": _STRING},
    },
    "required": ["title", "duration", "type", "objectives"],
}

MODULE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": _STRING,
        "description": _STRING,
        "lessons": {"type": "array", "items": LESSON_SCHEMA},
    },
    "required": ["title", "description", "lessons"],
}

CURRICULUM_SCHEMA = {
    "type": "object",
    "properties": {
        "title": _STRING,
        "description": _STRING,
        "targetAudience": _STRING,
        "difficultyLevel": {"type": "string", "enum": ["Beginner", "Intermediate", "Advanced"]},
        "estimatedTotalDuration": _STRING,
        "modules": {"type": "array", "items": MODULE_SCHEMA},
    },
    "required": [
        "title",
        "description",
        "targetAudience",
        "difficultyLevel",
        "estimatedTotalDuration",
        "modules",
    ],
}

ASSESSMENT_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Title of the assessment, e.g., 'Module 1 Quiz'"},
        "targetContext": {"type": "string", "description": "The specific lesson or module this covers"},
        "type": {"type": "string", "enum": ["Quiz", "Assignment"]},
        "totalPoints": _NUMBER,
        "questions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "text": {"type": "string", "description": "The question text"},
                    "type": {"type": "string", "enum": ["Multiple Choice", "Short Answer"]},
                    "options": {
                        "type": "array",
                        "items": _STRING,
                        "description": "Required for Multiple Choice",
                    },
                    "correctAnswer": _STRING,
                    "points": _NUMBER,
                },
                "required": ["id", "text", "type", "points"],
            },
        },
        "rubric": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "criteria": _STRING,
                    "description": _STRING,
                    "maxPoints": _NUMBER,
                },
                "required": ["criteria", "description", "maxPoints"],
            },
        },
    },
    "required": ["title", "type", "totalPoints", "targetContext"],
}
