# -*- coding: utf-8 -*-
"""
Translation dictionaries for Japanese and English.

This module contains all translatable strings used by exports and reports.
"""

TRANSLATIONS = {
    "ja": {
        # Application
        "app.name": "勤務時間トラッカー",
        "account.default_name": "メイン案件",

        # CSV export
        "csv.account": "案件名",
        "csv.date": "日付",
        "csv.weekday": "曜日",
        "csv.start": "開始時間",
        "csv.end": "終了時間",
        "csv.break": "休憩(分)",
        "csv.duration": "実働時間(h)",
        "csv.office": "出社",
        "csv.holiday": "祝日",
        "csv.office_mark": "〇",

        # Weekdays (Python weekday(): 0=Monday)
        "weekday.0": "月",
        "weekday.1": "火",
        "weekday.2": "水",
        "weekday.3": "木",
        "weekday.4": "金",
        "weekday.5": "土",
        "weekday.6": "日",

        # Monthly summary report
        "report.title": "月次レポート",
        "report.account": "案件",
        "report.total": "合計実働時間",
        "report.target": "目標",
        "report.progress": "進捗",
        "report.active_days": "稼働日数",
        "report.office_days": "出社日数",
        "report.trend": "日別推移",
        "report.hours_unit": "h",
    },
    "en": {
        # Application
        "app.name": "Work Time Tracker",
        "account.default_name": "Main Project",

        # CSV export
        "csv.account": "Account",
        "csv.date": "Date",
        "csv.weekday": "Weekday",
        "csv.start": "Start",
        "csv.end": "End",
        "csv.break": "Break (min)",
        "csv.duration": "Worked (h)",
        "csv.office": "Office",
        "csv.holiday": "Holiday",
        "csv.office_mark": "〇",

        # Weekdays (Python weekday(): 0=Monday)
        "weekday.0": "Mon",
        "weekday.1": "Tue",
        "weekday.2": "Wed",
        "weekday.3": "Thu",
        "weekday.4": "Fri",
        "weekday.5": "Sat",
        "weekday.6": "Sun",

        # Monthly summary report
        "report.title": "Monthly Report",
        "report.account": "Account",
        "report.total": "Total worked",
        "report.target": "Target",
        "report.progress": "Progress",
        "report.active_days": "Active days",
        "report.office_days": "Office days",
        "report.trend": "Daily trend",
        "report.hours_unit": "h",
    }
}
