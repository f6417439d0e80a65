from standup_app.core.framing import frame_metadata, parse_report
from standup_app.visual.report import section_markdown, section_title

META = {"yesterdayDate": "2024-01-05", "todayDate": "2024-01-06", "isWeekend": True}


def test_section_titles_carry_dates():
    report = parse_report(frame_metadata(META))
    assert section_title("yesterday", report) == "✅ Yesterday - Friday, Jan 5"
    assert section_title("today", report) == "✅ Today (Weekend) - Saturday, Jan 6"
    assert section_title("blockers", report) == "🚧 Blockers"


def test_arriving_section_shows_writing_placeholder():
    report = parse_report(frame_metadata(META) + "[YESTERDAY]\n")
    assert section_markdown("yesterday", report.yesterday, report) == "_Writing..._"
    assert section_markdown("today", report.today, report) == "_Writing..._"


def test_confirmed_empty_sections_use_fallback_messages():
    report = parse_report(frame_metadata(META) + "[YESTERDAY]\n• Shipped A\n[TODAY]\n[BLOCKERS]\n")
    assert section_markdown("yesterday", report.yesterday, report) == "- Shipped A"
    assert section_markdown("today", report.today, report) == "- Weekend - no work planned"
    assert section_markdown("blockers", report.blockers, report) == "- No blockers identified"
