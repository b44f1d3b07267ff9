"""
config.py — Global constants and configuration defaults

Every tunable of the dormitory hygiene report lives here as a module constant.
"""

from __future__ import annotations
import pathlib

ASSETS_DIR = pathlib.Path("assets")

# ---------------------------------------------------------------------
# Input files and their headers
# ---------------------------------------------------------------------

CLASSROOM_ROSTER_FILE = "nianji.csv"
MANAGER_ROSTER_FILE = "sushe.csv"
DEPARTMENT_ROSTER_FILE = "jibu.csv"
LOGO_FILE = "logo.png"

VIOLATION_COLUMNS = ["年级", "班级", "公寓", "宿舍", "原因"]
CLASSROOM_COLUMNS = ["年级", "级部", "班级", "班主任"]
MANAGER_COLUMNS = ["公寓", "楼层", "宿管"]
DEPARTMENT_COLUMNS = ["年级", "级部", "主任", "公寓"]

# Columns allowed to be blank (or missing on short rows) per file
OPTIONAL_COLUMNS = {"级部"}

CSV_ENCODING = "utf-8-sig"

# ---------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------

UNKNOWN = "未知"
FILLER = "/"
DEDUCTION = -1

# The one department whose dorms are split between two apartments
DUAL_APARTMENT_KEY = (2, "A")
DUAL_APARTMENTS = (1, 2)
DUAL_DEFAULT_APARTMENT = 1

# Managers missing from the roster sort after every listed floor
UNKNOWN_FLOOR = 99

# "dense": 1,1,2,3   "skip": 1,1,3,4
RANK_METHOD = "dense"

GRADE_NAMES = {1: "高一", 2: "高二", 3: "高三"}
CHINESE_NUMERALS = {
    1: "一", 2: "二", 3: "三", 4: "四", 5: "五",
    6: "六", 7: "七", 8: "八", 9: "九", 10: "十",
}

# ---------------------------------------------------------------------
# Report text and layout
# ---------------------------------------------------------------------

SHEET_NAME = "Sheet1"
TITLE = "高中部宿舍卫生验评通报总结"
INSPECTION_TARGET = "验评对象: 高一、高二、高三"
INSPECTING_OFFICE = "校办公室"
INSPECTION_ITEM = "高一高二高三男生宿舍卫生"
RULES_TEXT = (
    "宿舍卫生:宿舍卫生验评满分10分\n"
    "1.宿舍床铺被子叠放整齐(此项不合格每人扣1分)\n"
    "2.床单平整(此项不合格每人扣1分)\n"
    "3.无多余杂物(如衣物、书本、零食)此项不合格每人扣1分)\n"
    "4.簸箕内清理干净(此项不合格每人扣1分)"
)

LAST_COL = 8
RULES_ROW_HEIGHT = 80
LOGO_COL = 3
LOGO_SCALE = 0.3
TABLE_GAP_ROWS = 2
COLUMN_WIDTHS = [12, 12, 12, 10, 10, 18, 8, 8, 8]

# (first_col, last_col, label)
DEPARTMENT_HEADERS = [
    (0, 0, "公寓"),
    (1, 1, "级部"),
    (2, 2, "班主任"),
    (3, 3, "宿舍管理员"),
    (4, 4, "宿舍号"),
    (5, 5, "扣分原因"),
    (6, 6, "扣分"),
    (7, 7, "总扣分"),
    (8, 8, "排名"),
]
MANAGER_HEADERS = [
    (0, 0, "公寓"),
    (1, 1, "宿舍管理员"),
    (2, 2, "宿舍号"),
    (3, 4, "扣分原因"),
    (5, 5, "扣分"),
    (6, 7, "总扣分"),
    (8, 8, "排名"),
]

# ---------------------------------------------------------------------
# Command-line defaults
# ---------------------------------------------------------------------

DEFAULT_REPORTER = "侯英敏、杨超超、郭静、赵冰、申淑玲"
DEFAULT_DATE = "12月3日"
DEFAULT_TIME = "下午: 15:20-15:50"

LOG_FILE_NAME = "hygiene_report.log"

# If True, open the generated workbook with the OS default application
# after it is written. Keep False for headless runs.
AUTO_OPEN_REPORT = False
