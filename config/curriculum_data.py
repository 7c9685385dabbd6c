"""
config/curriculum_data.py

- 레벨(level) → 트랙(track, شعبة) → (과목, 계수) 정적 설정표
- 새 레벨/트랙 추가는 이 파일에 데이터만 추가하면 됨 (로직 변경 불필요)
- 과목 순서 = 화면 표시 순서 → 리스트(튜플)로 유지
"""

CURRICULUM_VERSION = "2024.1"

# ✅ 시험 종류 (저장된 성적을 구분하는 키로 사용)
EXAM_TYPES = {
    "continuous": {"name_ar": "المراقبة المستمرة", "name_fr": "Contrôle continu"},
    "regional": {"name_ar": "الامتحان الجهوي", "name_fr": "Examen régional"},
    "national": {"name_ar": "الامتحان الوطني", "name_fr": "Examen national"},
}

LEVELS = {
    "primary": {
        "name_ar": "السادس ابتدائي",
        "name_fr": "6ème Primaire",
        "tracks": {
            "general": {
                "name_ar": "عام",
                "name_fr": "Général",
                "subjects": [
                    ("اللغة العربية", 4),
                    ("اللغة الفرنسية", 3),
                    ("الرياضيات", 4),
                    ("النشاط العلمي", 2),
                    ("التربية الإسلامية", 2),
                    ("الاجتماعيات", 2),
                    ("التربية البدنية", 1),
                    ("التربية الفنية", 1),
                    ("التربية الموسيقية", 1),
                ],
            },
        },
    },
    "middle2": {
        "name_ar": "الثانية إعدادي",
        "name_fr": "2ème Année Collège",
        "tracks": {
            "general": {
                "name_ar": "عام",
                "name_fr": "Général",
                "subjects": [
                    ("اللغة العربية", 4),
                    ("اللغة الفرنسية", 3),
                    ("الإنجليزية", 2),
                    ("الرياضيات", 4),
                    ("علوم الحياة والأرض", 2),
                    ("الفيزياء والكيمياء", 2),
                    ("التربية الإسلامية", 2),
                    ("الاجتماعيات", 3),
                    ("التربية البدنية", 1),
                    ("التربية الفنية", 1),
                    ("المعلوميات", 1),
                ],
            },
        },
    },
    "middle3": {
        "name_ar": "الثالثة إعدادي",
        "name_fr": "3ème Année Collège",
        "tracks": {
            "general": {
                "name_ar": "عام",
                "name_fr": "Général",
                "subjects": [
                    ("اللغة العربية", 5),
                    ("اللغة الفرنسية", 3),
                    ("الإنجليزية", 2),
                    ("الرياضيات", 5),
                    ("علوم الحياة والأرض", 3),
                    ("الفيزياء والكيمياء", 3),
                    ("التربية الإسلامية", 2),
                    ("الاجتماعيات", 3),
                    ("التربية البدنية", 1),
                    ("التربية الفنية", 1),
                    ("المعلوميات", 2),
                ],
            },
        },
    },
    "bac1": {
        "name_ar": "الأولى باكالوريا",
        "name_fr": "1ère Bac",
        "tracks": {
            "general": {
                "name_ar": "علوم",
                "name_fr": "Sciences",
                "subjects": [
                    ("اللغة العربية", 4),
                    ("اللغة الفرنسية", 4),
                    ("الإنجليزية", 3),
                    ("الرياضيات", 7),
                    ("علوم الحياة والأرض", 7),
                    ("الفيزياء والكيمياء", 7),
                    ("التربية الإسلامية", 2),
                    ("الفلسفة", 4),
                    ("الاجتماعيات", 4),
                    ("التربية البدنية", 2),
                ],
            },
        },
    },
    "bac2": {
        "name_ar": "الثانية باكالوريا",
        "name_fr": "2ème Bac",
        "tracks": {
            "general": {
                "name_ar": "علوم",
                "name_fr": "Sciences",
                "subjects": [
                    ("اللغة العربية", 4),
                    ("اللغة الفرنسية", 4),
                    ("الإنجليزية", 3),
                    ("الرياضيات", 9),
                    ("علوم الحياة والأرض", 7),
                    ("الفيزياء والكيمياء", 7),
                    ("الفلسفة", 4),
                    ("الاجتماعيات", 2),
                ],
            },
            "svt": {
                "name_ar": "علوم تجريبية",
                "name_fr": "Sciences Expérimentales",
                "subjects": [
                    ("العربية", 3),
                    ("الفرنسية", 4),
                    ("الفلسفة", 2),
                    ("التربية الإسلامية", 1),
                    ("التاريخ والجغرافيا", 1),
                    ("الرياضيات", 5),
                    ("علوم الحياة والأرض", 6),
                    ("الفيزياء والكيمياء", 6),
                    ("الإنجليزية", 2),
                ],
            },
            "math_a": {
                "name_ar": "علوم رياضية أ",
                "name_fr": "Maths A",
                "subjects": [
                    ("العربية", 3),
                    ("الفرنسية", 4),
                    ("الفلسفة", 2),
                    ("التربية الإسلامية", 1),
                    ("الرياضيات", 9),
                    ("الفيزياء والكيمياء", 7),
                    ("الإنجليزية", 2),
                ],
            },
            "literary": {
                "name_ar": "آداب وعلوم إنسانية",
                "name_fr": "Littéraire",
                "subjects": [
                    ("العربية", 6),
                    ("الفرنسية", 3),
                    ("الفلسفة", 4),
                    ("التاريخ والجغرافيا", 4),
                    ("التربية الإسلامية", 1),
                    ("الإنجليزية", 2),
                ],
            },
            "economy": {
                "name_ar": "اقتصاد وتدبير",
                "name_fr": "Économie et Gestion",
                "subjects": [
                    ("العربية", 2),
                    ("الفرنسية", 3),
                    ("الفلسفة", 2),
                    ("الرياضيات", 3),
                    ("المحاسبة والرياضيات المالية", 6),
                    ("الاقتصاد العام والإحصاء", 5),
                    ("القانون", 2),
                ],
            },
        },
    },
}
