from __future__ import annotations


def test_dashboard_counts_and_invalidation(signup):
    c = signup()
    sid = c.post("/students", json={"name": "Andi", "nis": "1"}).get_json()["student"]["id"]

    stats = c.get("/dashboard/stats").get_json()
    assert stats == {
        "totalStudents": 1,
        "totalAttendanceToday": 0,
        "totalAttendanceThisMonth": 0,
        "recentAttendances": [],
    }

    c.post(
        "/attendance",
        json={
            "attendanceData": [
                {"studentId": sid, "subject": "Matematika", "status": "PRESENT"},
                {"studentId": sid, "subject": "Bahasa Indonesia", "status": "PRESENT", "date": "2024-03-02"},
                {"studentId": sid, "subject": "Bahasa Indonesia", "status": "ABSENT", "date": "2024-02-28"},
            ]
        },
    )

    stats = c.get("/dashboard/stats").get_json()
    assert stats["totalAttendanceToday"] == 1
    assert stats["totalAttendanceThisMonth"] == 2
    assert [r["date"] for r in stats["recentAttendances"]] == ["2024-03-15", "2024-03-02", "2024-02-28"]


def test_recent_attendance_is_capped_at_five(signup):
    c = signup()
    sid = c.post("/students", json={"name": "Andi", "nis": "1"}).get_json()["student"]["id"]
    entries = [
        {"studentId": sid, "subject": "Matematika", "status": "PRESENT", "date": f"2024-03-{d:02d}"}
        for d in range(1, 8)
    ]
    c.post("/attendance", json={"attendanceData": entries})

    recent = c.get("/dashboard/stats").get_json()["recentAttendances"]

    assert len(recent) == 5
    assert recent[0]["date"] == "2024-03-07"
