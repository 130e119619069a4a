from roadmap.models.completion import UserCourse
from roadmap.models.course import Course
from roadmap.models.relation import CourseRelation
from roadmap.services.catalog import (
    CompletionRecord,
    ElectiveTier,
    build_catalog,
    completed_ids,
    load_catalog,
    load_completed,
)


class TestBuildCatalog:
    def test_iterates_in_code_order(self, make_course):
        catalog = build_catalog([make_course("MAC2311"), make_course("COP3223"), make_course("CDA3103")])
        assert [c.code for c in catalog] == ["CDA3103", "COP3223", "MAC2311"]

    def test_self_references_dropped(self, make_course):
        catalog = build_catalog([make_course("A", prereqs={"A"}, coreqs={"A"}, alts={"A"})])
        course = catalog.get("A")
        assert course.prerequisites == frozenset()
        assert course.corequisites == frozenset()
        assert course.alternatives == frozenset()

    def test_unknown_coreq_and_alternative_dropped(self, make_course):
        catalog = build_catalog([make_course("A", coreqs={"GHOST"}, alts={"GHOST"})])
        assert catalog.get("A").corequisites == frozenset()
        assert catalog.alternative_group("A") == frozenset({"A"})

    def test_unknown_prerequisite_kept(self, make_course):
        catalog = build_catalog([make_course("A", prereqs={"X"})])
        assert catalog.get("A").prerequisites == frozenset({"X"})
        assert "X" not in catalog

    def test_alternatives_are_symmetric_and_transitive(self, make_course):
        catalog = build_catalog([
            make_course("M1", alts={"M2"}),
            make_course("M2"),
            make_course("M3", alts={"M2"}),
        ])
        expected = frozenset({"M1", "M2", "M3"})
        assert catalog.alternative_group("M1") == expected
        assert catalog.alternative_group("M2") == expected
        assert catalog.alternative_group("M3") == expected

    def test_duplicate_ids_keep_first(self, make_course):
        catalog = build_catalog([make_course("A", credits=4), make_course("A", credits=1)])
        assert len(catalog) == 1
        assert catalog.get("A").credits == 4

    def test_non_positive_credits_skipped(self, make_course):
        catalog = build_catalog([make_course("A", credits=0), make_course("B")])
        assert "A" not in catalog
        assert "B" in catalog


def test_completed_ids_only_counts_completed():
    records = [CompletionRecord("A"), CompletionRecord("B", completed=False)]
    assert completed_ids(records) == frozenset({"A"})


class TestLoadFromDatabase:
    def test_load_catalog_resolves_relations(self, db_session):
        db_session.add_all([
            Course(id="c1", code="COP3223C", name="Intro to C", credits=3),
            Course(id="c2", code="COP3502C", name="CS1", credits=3),
            Course(id="c3", code="CAP4630", name="AI", credits=3, is_elective=True, elective_tier="tier_a"),
            Course(id="c4", code="CAP5610", name="ML", credits=3, is_elective=True, elective_tier="bogus"),
            CourseRelation(course_id="c2", related_id="c1", relation="prerequisite"),
            CourseRelation(course_id="c3", related_id="c2", relation="corequisite"),
            CourseRelation(course_id="c1", related_id="c9", relation="alternative"),
        ])
        db_session.commit()

        courses = {c.id: c for c in load_catalog(db_session)}
        assert courses["c2"].prerequisites == frozenset({"c1"})
        assert courses["c3"].corequisites == frozenset({"c2"})
        assert courses["c1"].alternatives == frozenset({"c9"})
        assert courses["c3"].is_elective
        assert courses["c3"].elective_tier == ElectiveTier.TIER_A
        assert courses["c4"].elective_tier == ElectiveTier.NONE

    def test_load_completed_filters_by_user(self, db_session):
        db_session.add_all([
            UserCourse(user_id="u1", course_id="c1", completed=True),
            UserCourse(user_id="u1", course_id="c2", completed=False),
            UserCourse(user_id="u2", course_id="c3", completed=True),
        ])
        db_session.commit()

        records = load_completed(db_session, "u1")
        assert completed_ids(records) == frozenset({"c1"})
        assert len(records) == 2
