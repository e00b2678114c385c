"""
Course Information Service — Route Handler Tests
==================================================

What:  HTTP-level tests for every /api/courseInformation endpoint.
How:   The catalog service is an AsyncMock injected through
       app.dependency_overrides; requests go through the full middleware
       and exception-handler stack in-process.

What we test:
    ✅ Empty / missing required parameter → 400, service not called
    ✅ Service returns None or [] → 404
    ✅ Service returns data → 200 with camelCase payload
    ✅ Service raises → 500 with a generic body
    ✅ Listing endpoints answer 200 even when empty
"""

import pytest

from course_information.exceptions import CatalogDataError, NotFoundError

BASE = "/api/courseInformation"

# (path, valid params, service method, "nothing found" value, invalid params)
LOOKUP_ENDPOINTS = [
    ("/professor", {"professor": "Barnes"}, "get_course_sections_by_professor", [], {"professor": ""}),
    ("/coursesByMajor", {"major": "CSCI"}, "get_courses_by_major", None, {"major": ""}),
    ("/section-by-crn", {"crn": "10001"}, "get_section_details_by_crn", None, {"crn": "   "}),
    ("/course-by-athena-name", {"athenaName": "PRECALCULUS"}, "get_course_by_athena_name", None, {"athenaName": ""}),
    ("/course/specialCourseTypes", {"crn": "10002"}, "fetch_special_course_types", [], {}),
    ("/term", {"term": "Fall 2024"}, "get_courses_by_term", [], {"term": ""}),
    ("/getCourseById", {"courseId": "CSCI-1301"}, "get_course_by_id", None, {}),
    ("/courses", {"creditHours": "4"}, "get_courses", [], {"creditHours": "5"}),
    ("/course/coreqs", {"courseId": "CSCI-1301"}, "get_coreq_courses", [], {"courseId": "", "crn": ""}),
    ("/course/prereqs", {"crn": "10001"}, "get_prereq_courses", [], {}),
    ("/course/sections", {"timeSlot": "10:20 AM - 11:10 AM"}, "get_course_sections", [], {}),
    ("/requirement", {"requirement": "Quantitative Reasoning"}, "get_courses_by_requirement", [], {"requirement": ""}),
]

LISTING_ENDPOINTS = [
    ("/buildings", "get_all_buildings"),
    ("/subjects", "get_all_subjects"),
]


class TestLookupContract:
    """The 400 / 404 / 500 outcomes shared by every lookup endpoint."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,_params,method,_empty,bad_params", LOOKUP_ENDPOINTS)
    async def test_invalid_parameter_returns_400(
        self, test_client, mock_catalog_service, path, _params, method, _empty, bad_params
    ):
        response = await test_client.get(BASE + path, params=bad_params)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        getattr(mock_catalog_service, method).assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,params,method,empty,_bad", LOOKUP_ENDPOINTS)
    async def test_no_matching_data_returns_404(
        self, test_client, mock_catalog_service, path, params, method, empty, _bad
    ):
        getattr(mock_catalog_service, method).return_value = empty

        response = await test_client.get(BASE + path, params=params)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        getattr(mock_catalog_service, method).assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,params,method,_empty,_bad", LOOKUP_ENDPOINTS)
    async def test_service_failure_returns_500(
        self, test_client, mock_catalog_service, path, params, method, _empty, _bad
    ):
        getattr(mock_catalog_service, method).side_effect = RuntimeError("connection reset by peer")

        response = await test_client.get(BASE + path, params=params)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "connection reset" not in response.text

    @pytest.mark.asyncio
    async def test_empty_list_from_major_lookup_is_404(self, test_client, mock_catalog_service):
        mock_catalog_service.get_courses_by_major.return_value = []

        response = await test_client.get(f"{BASE}/coursesByMajor", params={"major": "XXXX"})

        assert response.status_code == 404
        assert "major='XXXX'" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_service_not_found_error_propagates_as_404(self, test_client, mock_catalog_service):
        mock_catalog_service.get_course_by_id.side_effect = NotFoundError(resource="course")

        response = await test_client.get(f"{BASE}/getCourseById", params={"courseId": "CSCI-9999"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_catalog_data_error_hides_details(self, test_client, mock_catalog_service):
        mock_catalog_service.get_courses_by_term.side_effect = CatalogDataError(
            context={"path": "/srv/catalog/secret.json"}
        )

        response = await test_client.get(f"{BASE}/term", params={"term": "Fall 2024"})

        assert response.status_code == 500
        assert "secret.json" not in response.text

    @pytest.mark.asyncio
    async def test_missing_required_parameter_returns_400(self, test_client, mock_catalog_service):
        response = await test_client.get(f"{BASE}/professor")

        assert response.status_code == 400
        assert response.json()["details"] == {"parameter": "professor"}
        mock_catalog_service.get_course_sections_by_professor.assert_not_awaited()


class TestSectionEndpoints:

    @pytest.mark.asyncio
    async def test_professor_returns_sections(self, test_client, mock_catalog_service, sample_section):
        mock_catalog_service.get_course_sections_by_professor.return_value = [sample_section]

        response = await test_client.get(f"{BASE}/professor", params={"professor": "  Barnes "})

        assert response.status_code == 200
        body = response.json()
        assert body[0]["crn"] == "10001"
        assert body[0]["startTime"] == "10:20 AM"
        mock_catalog_service.get_course_sections_by_professor.assert_awaited_once_with("Barnes")

    @pytest.mark.asyncio
    async def test_section_by_crn_returns_single_object(self, test_client, mock_catalog_service, sample_section):
        mock_catalog_service.get_section_details_by_crn.return_value = sample_section

        response = await test_client.get(f"{BASE}/section-by-crn", params={"crn": "10001"})

        assert response.status_code == 200
        assert response.json()["courseId"] == "CSCI-1301"

    @pytest.mark.asyncio
    async def test_special_course_types(self, test_client, mock_catalog_service):
        mock_catalog_service.fetch_special_course_types.return_value = ["honors", "online"]

        response = await test_client.get(f"{BASE}/course/specialCourseTypes", params={"crn": "10002"})

        assert response.status_code == 200
        assert response.json() == ["honors", "online"]

    @pytest.mark.asyncio
    async def test_sections_by_time_slot_and_crn(self, test_client, mock_catalog_service, sample_section):
        mock_catalog_service.get_course_sections.return_value = [sample_section]

        response = await test_client.get(
            f"{BASE}/course/sections",
            params={"timeSlot": "10:20 AM - 11:10 AM", "crn": "10001"},
        )

        assert response.status_code == 200
        mock_catalog_service.get_course_sections.assert_awaited_once_with(
            time_slot="10:20 AM - 11:10 AM", crn="10001"
        )

    @pytest.mark.asyncio
    async def test_sections_by_crn_only(self, test_client, mock_catalog_service, sample_section):
        mock_catalog_service.get_course_sections.return_value = [sample_section]

        response = await test_client.get(f"{BASE}/course/sections", params={"crn": "10001"})

        assert response.status_code == 200
        mock_catalog_service.get_course_sections.assert_awaited_once_with(time_slot=None, crn="10001")

    @pytest.mark.asyncio
    async def test_malformed_time_slot_returns_400(self, test_client, mock_catalog_service):
        response = await test_client.get(f"{BASE}/course/sections", params={"timeSlot": "mornings"})

        assert response.status_code == 400
        assert response.json()["details"]["parameter"] == "timeSlot"
        mock_catalog_service.get_course_sections.assert_not_awaited()


class TestCourseEndpoints:

    @pytest.mark.asyncio
    async def test_courses_by_major(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_courses_by_major.return_value = [sample_course]

        response = await test_client.get(f"{BASE}/coursesByMajor", params={"major": "CSCI"})

        assert response.status_code == 200
        body = response.json()
        assert body[0]["courseId"] == "CSCI-1302"
        assert body[0]["athenaName"] == "SOFTWARE DEVELOPMENT"
        assert body[0]["prerequisites"] == ["CSCI-1301"]

    @pytest.mark.asyncio
    async def test_course_by_athena_name(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_course_by_athena_name.return_value = [sample_course]

        response = await test_client.get(
            f"{BASE}/course-by-athena-name", params={"athenaName": "SOFTWARE DEVELOPMENT"}
        )

        assert response.status_code == 200
        mock_catalog_service.get_course_by_athena_name.assert_awaited_once_with("SOFTWARE DEVELOPMENT")

    @pytest.mark.asyncio
    async def test_courses_by_term(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_courses_by_term.return_value = [sample_course]

        response = await test_client.get(f"{BASE}/term", params={"term": "Fall 2024"})

        assert response.status_code == 200
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_course_by_id_returns_single_object(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_course_by_id.return_value = sample_course

        response = await test_client.get(f"{BASE}/getCourseById", params={"courseId": "CSCI-1302"})

        assert response.status_code == 200
        assert response.json()["title"] == "Software Development"

    @pytest.mark.asyncio
    async def test_courses_passes_optional_filters(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_courses.return_value = [sample_course]

        response = await test_client.get(
            f"{BASE}/courses",
            params={"creditHours": "4", "majorCode": "CSCI", "classLevel": "1000"},
        )

        assert response.status_code == 200
        mock_catalog_service.get_courses.assert_awaited_once_with(4, major_code="CSCI", class_level=1000)

    @pytest.mark.asyncio
    async def test_courses_blank_major_code_is_ignored(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_courses.return_value = [sample_course]

        response = await test_client.get(f"{BASE}/courses", params={"creditHours": "4", "majorCode": ""})

        assert response.status_code == 200
        mock_catalog_service.get_courses.assert_awaited_once_with(4, major_code=None, class_level=None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credit_hours", ["0", "-1", "5", "abc"])
    async def test_courses_rejects_bad_credit_hours(self, test_client, mock_catalog_service, credit_hours):
        response = await test_client.get(f"{BASE}/courses", params={"creditHours": credit_hours})

        assert response.status_code == 400
        mock_catalog_service.get_courses.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_courses_without_credit_hours_returns_400(self, test_client, mock_catalog_service):
        response = await test_client.get(f"{BASE}/courses", params={"majorCode": "CSCI"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_coreqs_by_crn_only(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_coreq_courses.return_value = [sample_course]

        response = await test_client.get(f"{BASE}/course/coreqs", params={"crn": "10003"})

        assert response.status_code == 200
        mock_catalog_service.get_coreq_courses.assert_awaited_once_with(course_id=None, crn="10003")

    @pytest.mark.asyncio
    async def test_prereqs_by_course_id(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_prereq_courses.return_value = [sample_course]

        response = await test_client.get(f"{BASE}/course/prereqs", params={"courseId": "CSCI-2610"})

        assert response.status_code == 200
        mock_catalog_service.get_prereq_courses.assert_awaited_once_with(course_id="CSCI-2610", crn=None)

    @pytest.mark.asyncio
    async def test_requirement(self, test_client, mock_catalog_service, sample_course):
        mock_catalog_service.get_courses_by_requirement.return_value = [sample_course]

        response = await test_client.get(f"{BASE}/requirement", params={"requirement": "Quantitative Reasoning"})

        assert response.status_code == 200
        assert response.json()[0]["courseNumber"] == "1302"


class TestListingEndpoints:

    @pytest.mark.asyncio
    async def test_buildings(self, test_client, mock_catalog_service, sample_building):
        mock_catalog_service.get_all_buildings.return_value = [sample_building]

        response = await test_client.get(f"{BASE}/buildings")

        assert response.status_code == 200
        assert response.json()[0]["buildingNumber"] == "1023"

    @pytest.mark.asyncio
    async def test_subjects(self, test_client, mock_catalog_service):
        mock_catalog_service.get_all_subjects.return_value = ["CSCI", "MATH"]

        response = await test_client.get(f"{BASE}/subjects")

        assert response.status_code == 200
        assert response.json() == ["CSCI", "MATH"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,method", LISTING_ENDPOINTS)
    async def test_empty_listing_is_200(self, test_client, mock_catalog_service, path, method):
        getattr(mock_catalog_service, method).return_value = []

        response = await test_client.get(BASE + path)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,method", LISTING_ENDPOINTS)
    async def test_listing_failure_returns_500(self, test_client, mock_catalog_service, path, method):
        getattr(mock_catalog_service, method).side_effect = ValueError("bad row")

        response = await test_client.get(BASE + path)

        assert response.status_code == 500
