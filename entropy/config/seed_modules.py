# entropy/config/seed_modules.py
# Catálogo fijo que se siembra al arrancar (una sola vez en stores durables)
from typing import List

from entropy.models.module_model import Module

_VIDEO = "https://www.youtube.com/embed/dQw4w9WgXcQ"

SEED_MODULES = [
    {
        "id": 1,
        "category": "Design",
        "title": "Intro to Graphic Design",
        "description": "Learn the fundamentals of visual design, color theory, and typography. Perfect for beginners!",
        "duration": "2 hours",
        "level": "Beginner",
    },
    {
        "id": 2,
        "category": "Design",
        "title": "UI/UX Design Basics",
        "description": "Master user interface and experience design principles for digital products.",
        "duration": "3 hours",
        "level": "Beginner",
    },
    {
        "id": 3,
        "category": "Design",
        "title": "Digital Photography",
        "description": "Capture stunning images with professional techniques and composition rules.",
        "duration": "2.5 hours",
        "level": "Intermediate",
    },
    {
        "id": 4,
        "category": "Filmmaking",
        "title": "Intro to Storyboarding",
        "description": "Plan your films with professional storyboarding techniques and visual storytelling.",
        "duration": "2 hours",
        "level": "Beginner",
    },
    {
        "id": 5,
        "category": "Filmmaking",
        "title": "Cinematography 101",
        "description": "Learn camera angles, lighting, and shot composition for compelling visuals.",
        "duration": "3 hours",
        "level": "Intermediate",
    },
    {
        "id": 6,
        "category": "Filmmaking",
        "title": "Video Editing Mastery",
        "description": "Master post-production with industry-standard editing software and techniques.",
        "duration": "4 hours",
        "level": "Intermediate",
    },
    {
        "id": 7,
        "category": "Music",
        "title": "Music Production Basics",
        "description": "Create professional-quality tracks using digital audio workstations and mixing techniques.",
        "duration": "3 hours",
        "level": "Beginner",
    },
    {
        "id": 8,
        "category": "Music",
        "title": "Audio Recording & Mixing",
        "description": "Learn professional recording techniques and audio mixing for crystal-clear sound.",
        "duration": "2.5 hours",
        "level": "Intermediate",
    },
    {
        "id": 9,
        "category": "Music",
        "title": "Sound Design for Film",
        "description": "Create immersive soundscapes and audio effects for video projects.",
        "duration": "3.5 hours",
        "level": "Advanced",
    },
]


def seed_modules() -> List[Module]:
    return [Module(videoUrl=_VIDEO, enrolled=0, **m) for m in SEED_MODULES]
