"""
Recognition prompts sent to the vision backends.
"""

RECOGNITION_PROMPT = """Analyze this image of a medicine package or label.
Task: Identify the FULL MEDICINE NAME (e.g. "Dolo 650", "Augmentin 625").
Ignore isolated numbers.

For every medicine name, add an entry to "detectedObjects" at the same index,
with the box around the printed name in percent of the image size (0-100).

Return ONLY JSON:
{
  "detectedObjects": [{"name": "Bottle", "type": "container", "confidence": 0.9, "boundingBox": {"x": 50, "y": 50, "width": 0, "height": 0}}],
  "extractedText": ["visible text"],
  "medicineCandidates": ["Exact Name Found"]
}"""
