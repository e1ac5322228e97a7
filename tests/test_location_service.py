from conftest import BOSTON_COMMON, make_request
from core.models import Coordinates
from core.services.location_service import DEFAULT_GAZETTEER, Gazetteer, resolve_location


class TestGazetteer:
    def test_known_landmarks(self):
        assert DEFAULT_GAZETTEER.lookup("Boston Common") == Coordinates(42.3554, -71.0655)
        assert DEFAULT_GAZETTEER.lookup("Faneuil Hall") == Coordinates(42.3600, -71.0568)
        assert len(DEFAULT_GAZETTEER) == 7
        assert "TD Garden" in DEFAULT_GAZETTEER.names()

    def test_lookup_ignores_case_and_spacing(self):
        assert DEFAULT_GAZETTEER.lookup("  boston   COMMON ") == BOSTON_COMMON

    def test_unknown_and_empty_names(self):
        assert DEFAULT_GAZETTEER.lookup("Atlantis") is None
        assert DEFAULT_GAZETTEER.lookup("") is None
        assert DEFAULT_GAZETTEER.lookup(None) is None

    def test_with_entries_does_not_mutate_original(self):
        fenway = Coordinates(42.3467, -71.0972)
        extended = DEFAULT_GAZETTEER.with_entries({"Fenway Park": fenway})
        assert extended.lookup("Fenway Park") == fenway
        assert "Fenway Park" not in DEFAULT_GAZETTEER
        assert "Boston Common" in extended


class TestResolveLocation:
    def test_explicit_coordinates_win(self):
        pin = Coordinates(10.0, 20.0)
        req = make_request(location_name="Boston Common", coordinates=pin)
        assert resolve_location(req) == pin

    def test_name_lookup(self):
        assert resolve_location(make_request(location_name="Boston Common")) == BOSTON_COMMON

    def test_unresolvable(self):
        assert resolve_location(make_request(location_name="Custom Location")) is None
        assert resolve_location(make_request(location_name=None)) is None

    def test_custom_gazetteer(self):
        gaz = Gazetteer({"Home": Coordinates(1.0, 2.0)})
        assert resolve_location(make_request(location_name="Home"), gaz) == Coordinates(1.0, 2.0)
        assert resolve_location(make_request(location_name="Boston Common"), gaz) is None
