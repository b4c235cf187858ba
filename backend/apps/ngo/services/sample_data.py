"""
Seed rows served when the database is empty or unreachable.

Program rows are deliberately written in both schema generations' shapes;
``SampleStore`` normalizes them once when it is seeded.
"""
from __future__ import annotations

SAMPLE_DONORS = [
    {
        "donor_id": 1,
        "name": "김하늘",
        "email": "sky.kim@example.com",
        "phone": "010-1234-5678",
        "password": "sky1234",
        "created_at": "2024-03-02T09:15:00",
    },
    {
        "donor_id": 2,
        "name": "이도윤",
        "email": "doyun.lee@example.com",
        "phone": "010-2345-6789",
        "password": "doyun!2",
        "created_at": "2024-05-17T14:40:00",
    },
    {
        "donor_id": 3,
        "name": "박서연",
        "email": "seoyeon.park@example.com",
        "phone": "010-3456-7890",
        "password": "seoyeon3",
        "created_at": "2024-08-21T11:05:00",
    },
]

SAMPLE_CATEGORIES = [
    {"category_id": "1", "category_name": "아동", "description": "아동 복지 및 결식 지원"},
    {"category_id": "2", "category_name": "환경", "description": "환경 보호와 자원 순환"},
    {"category_id": "3", "category_name": "교육", "description": "교육 기회 확대"},
    {"category_id": "4", "category_name": "동물", "description": "유기 동물 보호"},
    {"category_id": "5", "category_name": "보건", "description": "의료 접근성 개선"},
    {"category_id": "6", "category_name": "기타", "description": None},
]

SAMPLE_COMPANIES = [
    {"company_id": 1, "company_name": "희망나눔재단", "contact": "02-123-4567", "address": "서울특별시 종로구 새문안로 21"},
    {"company_id": 2, "company_name": "푸른지구연대", "contact": "031-987-6543", "address": "경기도 수원시 팔달구 효원로 1"},
    {"company_id": 3, "company_name": "함께배움협회", "contact": "051-555-0101", "address": "부산광역시 해운대구 센텀중앙로 79"},
]

SAMPLE_PROGRAMS = [
    {
        "program_id": "PRG-001",
        "program_name": "결식아동 도시락 지원",
        "category": "children",
        "status": "running",
        "start_date": "2025-03-01",
        "end_date": "2026-12-31",
        "total_amount": 12000000,
        "location": "서울특별시 종로구",
        "description": "방학 중 결식 우려 아동에게 도시락을 전달합니다.",
        "organization": "희망나눔재단",
        "contact": "02-123-4567",
        "company_id": 1,
    },
    {
        "program_id": "PRG-002",
        "program_name": "해변 플라스틱 줍기",
        "category": "환경",
        "status": "계획",
        "start_date": "2027-05-01",
        "end_date": "2027-08-31",
        "total_amount": 3500000,
        "location": "부산광역시 해운대구",
        "description": "여름 성수기 해변 정화 활동",
        "organization": "푸른지구연대",
        "contact": "031-987-6543",
        "company_id": 2,
    },
    # Older generation: upper-case enum, camelCase fields, goal_amount.
    {
        "id": "PRG-003",
        "name": "농어촌 방과후 코딩 교실",
        "category_name": "education",
        "status": "PENDING",
        "startDate": "2027-03-02",
        "endDate": "2027-12-20",
        "goal_amount": "8000000",
        "place": "전라남도 순천시",
        "goal_description": "농어촌 초등학생 대상 코딩 교육",
        "company_name": "함께배움협회",
        "company_phone": "051-555-0101",
        "companyId": 3,
    },
    {
        "id": "PRG-004",
        "name": "유기견 보호소 겨울나기",
        "category": "동물",
        "status_name": "진행 완료",
        "start_at": "2024-11-01",
        "end_at": "2025-02-28",
        "totalAmount": 2000000,
        "address": "경기도 화성시",
        "purpose": "보호소 난방비와 사료 지원",
        "organization": "희망나눔재단",
        "phone": "02-123-4567",
        "company_id": 1,
    },
    {
        "program_id": "PRG-005",
        "program_name": "찾아가는 건강검진",
        "category": "health",
        "status": "approved",
        "start_date": "2026-01-15",
        "end_date": None,
        "total_amount": None,
        "location": "강원특별자치도 일대",
        "description": "의료 취약 지역 순회 검진",
        "organization": "푸른지구연대",
        "contact": "031-987-6543",
        "company_id": 2,
    },
    {
        "program_id": "PRG-006",
        "program_name": "청소년 장학금",
        "category_id": 3,
        "status": "승인 전",
        "start_date": "2027-02-01",
        "end_date": "2027-11-30",
        "total_amount": "15000000",
        "location": "전국",
        "description": "저소득 가정 청소년 장학 지원",
        "organization": "함께배움협회",
        "contact": "051-555-0101",
        "company_id": 3,
    },
]
