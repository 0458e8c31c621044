"""
Prompt templates for each request shape.

The templates are static; only the user's text and a note about the
attachments are substituted in. Literal JSON braces are doubled for
``str.format``.
"""

from scamcheck.llm.schemas import AnalysisVariant

_INDICATORS = """VERY IMPORTANT: Pay close attention to all potential scam indicators and evolving tactics.
- URL/Domain Analysis: typosquatting ('gooogle.com' vs 'google.com'), homograph attacks (Cyrillic 'а' vs Latin 'a'; treat these as HIGH RISK), suspicious TLDs for well-known entities, URL shorteners combined with other red flags.
- Content Analysis: urgency and threats, generic greetings, poor grammar, unexpected links or attachments, requests for passwords, OTPs or card details, offers too good to be true, impersonation of government agencies, banks or known companies, investment, romance and job offer scams.
- Contextual Clues: lack of context, unsolicited contact from unknown numbers or addresses.
Consider current scamming trends. If multiple indicators are present, elevate the risk level accordingly."""

_REPORTING_AGENCIES = """{{"name": "Philippine National Police Anti-Cybercrime Group (PNP ACG)", "link": "https://www.pnpacg.ph/"}},
    {{"name": "National Bureau of Investigation Cybercrime Division (NBI CCD)", "link": "https://www.nbi.gov.ph/cybercrime/"}},
    {{"name": "Department of Trade and Industry (DTI)", "link": "https://www.dti.gov.ph/konsyumer/complaints/"}},
    {{"name": "National Privacy Commission (NPC)", "link": "https://www.privacy.gov.ph/complaints-assisted/"}}"""

_SHARED_FIELDS = """  "status": "string (Normal Conversation, Low Risk Detected, Moderate Risk Detected, High Risk Detected, Very High Risk Detected, Requires More Context)",
  "assessment": "string (e.g., Likely Not a Scam, Potentially a Scam, Highly Likely a Scam)",
  "scam_probability": "string percentage (e.g., 10%, 50%, 90%)",
  "ai_confidence": "string (Low, Medium, High)",
  "explanation_english": "string (detailed explanation in English, at least 3-5 sentences, of WHY it is or isn't a scam)",
  "explanation_tagalog": "string (detalyadong paliwanag sa Tagalog, hindi bababa sa 3-5 pangungusap)",
  "advice": "string (specific, actionable advice in English)",
  "how_to_avoid_scams": ["string (general tip in English)", "..."],
  "where_to_report": [
    """ + _REPORTING_AGENCIES + """
  ],
  "true_vs_false": "string (how to tell true from false information in this case, English)",
  "true_vs_false_tagalog": "string (paano malalaman ang totoo sa hindi, Tagalog)",
  "keywords": ["string (suspicious word or phrase found)"],
  "what_to_do_if_scammed": ["string (step in English)"],
  "what_to_do_if_scammed_tagalog": ["string (hakbang sa Tagalog)"]"""

TEXT_PROMPT = """Analyze the following text to determine if it is a scam. The user is likely in the Philippines.
Text to analyze: "{content}"

""" + _INDICATORS + """

Respond with a single, minified JSON object matching this exact structure, and nothing else. Do not include any text before or after the JSON object (e.g. no "```json" markers):
{{
""" + _SHARED_FIELDS + """
}}

Ensure all string values are properly escaped for JSON. The "where_to_report" section should be exactly as provided if the context is the Philippines.
"""

IMAGE_PROMPT = """Analyze the attached image, and the accompanying text if any, to determine if it shows a scam (fake websites, phishing messages, fraudulent offers, doctored screenshots). The user is likely in the Philippines.
Accompanying text: "{content}"
{context}
""" + _INDICATORS + """
Also inspect the image for logos that do not match the sender, manipulated screenshots, QR codes and visible URLs.

Respond with a single JSON object matching this structure:
{{
""" + _SHARED_FIELDS + """,
  "image_analysis": "string (what the image shows and which elements are suspicious)"
}}
"""

AUDIO_PROMPT = """Listen to the attached audio recording, and read the accompanying text if any, to determine if it is a scam call or voice message (impersonation, fake emergencies, requests for OTPs or money, synthetic voices). The user is likely in the Philippines.
Accompanying text: "{content}"
{context}
""" + _INDICATORS + """

Respond with a single JSON object matching this structure:
{{
  "isScam": boolean,
  "probability": number (0-100),
  "confidence": "string (Low, Medium, High)",
  "riskLevel": "string (Low, Medium, High, Very High)",
  "explanation": "string (detailed explanation in English)",
  "explanationTagalog": "string (detalyadong paliwanag sa Tagalog)",
  "advice": "string (specific, actionable advice in English)",
  "tutorialsAndTips": ["string (general tip in English)", "..."],
  "complaintFilingInfo": {{
    "introduction": "string (one sentence on where to file a complaint)",
    "agencies": [{{"name": "string", "url": "string", "description": "string"}}]
  }},
  "audioAnalysis": "string (what is said, tone, and which parts are suspicious)",
  "true_vs_false": "string (how to tell true from false information in this case, English)",
  "true_vs_false_tagalog": "string (paano malalaman ang totoo sa hindi, Tagalog)"
}}
"""

PROMPT_TEMPLATES = {
    AnalysisVariant.TEXT: TEXT_PROMPT,
    AnalysisVariant.IMAGE: IMAGE_PROMPT,
    AnalysisVariant.AUDIO: AUDIO_PROMPT,
}


def render_prompt(
    variant: AnalysisVariant,
    content: str = "",
    has_image: bool = False,
) -> str:
    """
    Render the prompt for a request shape.

    Args:
        variant: Selected request shape
        content: User-provided text, possibly empty
        has_image: Whether an image is attached alongside audio

    Returns:
        Prompt text sent as the first part of the request
    """
    context = []
    if variant is AnalysisVariant.AUDIO and has_image:
        context.append("An image was also provided; use it as supporting context.")
    if not content.strip() and variant is not AnalysisVariant.TEXT:
        context.append("No text was provided; base the analysis on the attachment.")

    return PROMPT_TEMPLATES[variant].format(content=content, context="\n".join(context))
