from mock_interview.services.question_bank import get_questions

INTERVIEW_TIPS = [
    "Speak clearly and maintain good posture",
    "Use the STAR method for behavioral questions",
    "Take a moment to think before answering",
    "Make eye contact with the camera",
]


def build_final_report(raw_report: dict) -> dict:
    elapsed = raw_report.get("elapsed_seconds", 0)
    total = raw_report.get("total_duration_seconds") or 1
    asked = raw_report.get("questions_asked", [])
    bank = get_questions(raw_report.get("difficulty"))

    completion_percentage = min(100, int((elapsed / total) * 100))

    # Interpretation (Static)
    interpretation = {}

    if raw_report.get("completion_reason") == "ended":
        interpretation["duration"] = (
            f"Session was ended early after {elapsed} of {total} seconds"
        )
    else:
        interpretation["duration"] = "Session ran for its full duration"

    unanswered = len(bank) - len(asked)
    if unanswered > 0:
        interpretation["coverage"] = (
            f"{unanswered} question(s) were not reached"
        )

    if not raw_report.get("device_available", False):
        interpretation["media"] = (
            "Camera and microphone were unavailable during the session"
        )

    return {
        "session_id": raw_report["session_id"],

        "summary": {
            "difficulty": raw_report.get("difficulty"),
            "interviewer_gender": raw_report.get("interviewer_gender"),
            "completion_reason": raw_report.get("completion_reason"),
            "completion_percentage": completion_percentage,
            "questions_asked": len(asked),
            "questions_total": len(bank),
        },

        "questions": [
            {"id": q["id"], "text": q["text"]}
            for q in asked
        ],

        "interpretation": interpretation,

        "tips": INTERVIEW_TIPS,

        "next_step_note": (
            "Start a new session to practice again at the same or a harder difficulty."
        ),
    }
