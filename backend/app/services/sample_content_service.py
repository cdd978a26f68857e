"""데모/초기 운영용 샘플 콘텐츠를 기본 메뉴에 연결해 생성합니다."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.models.content import Content, ContentType, PublishStatus
from app.models.menu import Menu

logger = logging.getLogger(__name__)

SAMPLE_AUTHOR = "김종서장군기념사업회"

SAMPLE_CONTENTS = (
    {
        "title": "김종서 장군의 어린 시절과 성장 배경",
        "content": (
            "# 김종서 장군의 어린 시절\n\n"
            "절재(節齋) 김종서(金宗瑞, 1383~1453)는 조선 전기의 문신이자 무신입니다.\n\n"
            "## 과거 급제와 관직 진출\n\n"
            "1405년(태종 5년) 문과에 급제하여 관직에 나아갔으며, 이후 다양한 관직을 역임하며 경험을 쌓았습니다."
        ),
        "type": ContentType.ARTICLE,
        "category": "생애사",
        "menu_url": "life",
        "author_name": SAMPLE_AUTHOR,
        "sort_order": 1,
    },
    {
        "title": "6진 개척의 위대한 업적",
        "content": (
            "# 6진 개척 - 김종서의 최대 업적\n\n"
            "1433년(세종 15년)부터 약 16년간 종성, 온성, 회령, 부령, 경원, 경흥의 6진을 설치해 "
            "조선의 영토를 두만강까지 확장했습니다."
        ),
        "type": ContentType.ARTICLE,
        "category": "주요업적",
        "menu_url": "life",
        "sort_order": 2,
    },
    {
        "title": "2024년 김종서 장군 추모제 개최 안내",
        "content": (
            "# 2024년 김종서 장군 추모제 개최\n\n"
            "- **일시**: 2024년 10월 10일(목) 오전 10시\n"
            "- **장소**: 서울특별시 종로구 김종서 기념관\n"
            "- **문의 전화**: 02-1234-5678"
        ),
        "type": ContentType.ANNOUNCEMENT,
        "category": "행사안내",
        "menu_url": "announcements",
        "sort_order": 1,
    },
    {
        "title": "김종서 장군 서거 571주기 추모식 성료",
        "content": (
            "# 김종서 장군 서거 571주기 추모식 성황리에 마무리\n\n"
            "유족, 학계 인사, 시민 등 200여 명이 참석하여 김종서 장군의 업적을 기렸습니다."
        ),
        "type": ContentType.PRESS_RELEASE,
        "category": "행사소식",
        "menu_url": "press",
        "sort_order": 1,
    },
    {
        "title": "김종서 장군의 6진 개척 다큐멘터리",
        "content": "# 김종서 장군의 6진 개척 - 역사 다큐멘터리\n\n15세기 조선의 북방 개척 과정을 재현한 다큐멘터리입니다.",
        "type": ContentType.VIDEO,
        "category": "역사영상",
        "youtube_id": "dQw4w9WgXcQ",
        "menu_url": "archive",
        "sort_order": 1,
    },
    {
        "title": "김종서의 정치사상과 경세관에 관한 연구",
        "content": (
            "# 김종서의 정치사상과 경세관에 관한 연구\n\n"
            "## 초록\n\n"
            "본 연구는 조선 전기 문신인 김종서(1383-1453)의 정치사상과 경세관을 체계적으로 분석한 것이다."
        ),
        "type": ContentType.ACADEMIC_MATERIAL,
        "category": "정치사상",
        "metadata": {"author": "○○○", "journal": "한국사학보", "year": "2024", "pages": "45-78"},
        "menu_url": "academic",
        "sort_order": 1,
    },
)


def seed_sample_content(db: Session) -> int:
    """콘텐츠가 하나도 없을 때만 샘플을 만든다. 생성한 개수를 돌려준다."""
    if db.query(Content.id).count() > 0:
        logger.info("[seed] sample content already exists, skipping")
        return 0

    menus_by_url = {}
    for menu in db.query(Menu).order_by(Menu.sort_order.asc(), Menu.id.asc()).all():
        menus_by_url.setdefault(menu.url, menu)
    if not menus_by_url:
        logger.info("[seed] no menus found, cannot seed sample content")
        return 0

    created = 0
    now = datetime.utcnow()
    for sample in SAMPLE_CONTENTS:
        menu = menus_by_url.get(sample["menu_url"])
        if menu is None:
            continue
        db.add(
            Content(
                title=sample["title"],
                content=sample["content"],
                type=sample["type"].value,
                status=PublishStatus.PUBLISHED.value,
                category=sample.get("category"),
                author_name=sample.get("author_name"),
                sort_order=sample["sort_order"],
                menu_id=menu.id,
                youtube_id=sample.get("youtube_id"),
                extra_metadata=sample.get("metadata"),
                published_at=now,
            )
        )
        created += 1
    db.commit()
    logger.info("[seed] %s sample contents created", created)
    return created
