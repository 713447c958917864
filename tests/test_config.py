"""
Test Suite for Configuration

Tests:
- Loading requests from dicts and files (camelCase and snake_case)
- Packaged presets
- Validation order and error kinds
- Settings loading and merging
"""

import json

import pytest
import yaml

from dummyforge.config import (
    AgeConfig,
    ConfigLoader,
    ConfigValidator,
    DemographicsConfig,
    GenerationConfig,
    LocationConfig,
    Settings,
    EngineSettings,
    generation_config_to_dict,
    get_default_generation_config,
)
from dummyforge.errors import DummyForgeError, ErrorKind
from dummyforge.field_types import FieldType


@pytest.fixture
def loader():
    return ConfigLoader()


@pytest.fixture
def wire_request():
    return {
        "fields": [
            {"name": "id", "type": "autoIncrementCustom", "unique": True,
             "config": {"start": 10, "step": 5}},
            {"name": "code", "type": "randomAlphanumeric",
             "config": {"lengthMin": 4, "lengthMax": 4, "prefix": "C-"}},
            {"name": "joined", "type": "registrationDate", "config": {"dateFormat": "eu"}},
        ],
        "count": 25,
        "demographics": {
            "malePercentage": 30,
            "femalePercentage": 70,
            "ageConfig": {"mode": "under", "max": 12},
        },
        "location": {"mode": "single", "singleCountry": "FR"},
    }


def _errors(config):
    return [error.kind for error in ConfigValidator.collect_errors(config)]


class TestConfigLoader:
    """Test request loading"""

    def test_load_camel_case(self, loader, wire_request):
        config = loader.load_from_dict(wire_request)

        assert config.count == 25
        assert config.demographics.male_percentage == 30
        assert config.demographics.age_config == AgeConfig(mode="under", min=18, max=12)
        assert config.location.single_country == "FR"
        assert config.fields[0].type is FieldType.AUTO_INCREMENT_CUSTOM
        assert config.fields[0].config.step == 5
        assert config.fields[1].config.length_min == 4
        assert config.fields[2].config.date_format == "eu"

    def test_load_snake_case(self, loader):
        config = loader.load_from_dict({
            "fields": [{"name": "code", "type": "randomString", "config": {"length_max": 3}}],
            "demographics": {"male_percentage": 60, "female_percentage": 40},
            "location": {"mode": "specific", "countries": ["US"]},
        })

        assert config.fields[0].config.length_max == 3
        assert config.demographics.female_percentage == 40
        assert config.location.countries == ["US"]

    def test_defaults(self, loader):
        config = loader.load_from_dict({"fields": [{"name": "a", "type": "uuid"}]})

        assert config.count == 100
        assert config.demographics == DemographicsConfig()
        assert config.location == LocationConfig()

    def test_unknown_keys_are_ignored(self, loader):
        config = loader.load_from_dict({
            "fields": [{"name": "a", "type": "uuid", "config": {"colour": "blue"}}],
        })

        assert config.fields[0].config.prefix is None

    def test_field_without_type(self, loader):
        with pytest.raises(DummyForgeError) as excinfo:
            loader.load_from_dict({"fields": [{"name": "a"}]})

        assert excinfo.value.kind == ErrorKind.INVALID_FIELD_CONFIG

    def test_non_mapping_options(self, loader):
        with pytest.raises(DummyForgeError) as excinfo:
            loader.load_from_dict({"fields": [{"name": "a", "type": "uuid", "config": [1, 2]}]})

        assert excinfo.value.kind == ErrorKind.INVALID_FIELD_CONFIG

    def test_unknown_type_is_kept(self, loader):
        config = loader.load_from_dict({"fields": [{"name": "a", "type": "hologram"}]})

        assert config.fields[0].type == "hologram"
        assert config.fields[0].type_name == "hologram"

    def test_wire_round_trip(self, loader, wire_request):
        config = loader.load_from_dict(wire_request)

        assert loader.load_from_dict(generation_config_to_dict(config)) == config

    def test_wire_form_uses_camel_case(self, loader, wire_request):
        wire = generation_config_to_dict(loader.load_from_dict(wire_request))

        assert wire["demographics"]["ageConfig"] == {"mode": "under", "max": 12}
        assert wire["location"] == {"mode": "single", "singleCountry": "FR"}
        assert wire["fields"][1]["config"] == {"lengthMin": 4, "lengthMax": 4, "prefix": "C-"}

    def test_save_and_load_yaml(self, loader, tmp_path):
        path = tmp_path / "request.yaml"
        config = get_default_generation_config()

        loader.save_config(config, path)

        assert yaml.safe_load(path.read_text())["fields"][0]["type"] == "autoIncrement"
        assert loader.load_from_file(path) == config

    def test_load_json(self, loader, tmp_path, wire_request):
        path = tmp_path / "request.json"
        path.write_text(json.dumps(wire_request))

        assert loader.load_from_file(path).count == 25

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load_from_file(tmp_path / "missing.yaml")

    def test_unsupported_extension(self, loader, tmp_path):
        path = tmp_path / "request.toml"
        path.write_text("count = 1")

        with pytest.raises(ValueError):
            loader.load_from_file(path)

    def test_top_level_list_is_rejected(self, loader, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(DummyForgeError):
            loader.load_from_file(path)


class TestPresets:
    """Test packaged presets"""

    def test_presets_are_listed(self, loader):
        assert {"students", "employees", "customers"} <= set(loader.list_presets())

    @pytest.mark.parametrize("name", ["students", "employees", "customers"])
    def test_presets_are_valid(self, loader, name):
        is_valid, errors = ConfigValidator.validate(loader.load_preset(name))

        assert is_valid, errors

    def test_preset_is_a_copy(self, loader):
        preset = loader.load_preset("students")
        preset.count = 1

        assert loader.load_preset("students").count == 200

    def test_unknown_preset(self, loader):
        with pytest.raises(ValueError, match="not found"):
            loader.load_preset("astronauts")

    def test_custom_preset_dir(self, tmp_path):
        (tmp_path / "tiny.yaml").write_text(
            "count: 3\nfields:\n  - name: id\n    type: uuid\n"
        )
        (tmp_path / "broken.yaml").write_text("fields:\n  - name: nameless\n")

        loader = ConfigLoader(preset_dir=tmp_path)

        assert loader.list_presets() == ["tiny"]
        assert loader.load_preset("tiny").count == 3

    def test_missing_preset_dir(self, tmp_path):
        assert ConfigLoader(preset_dir=tmp_path / "nope").list_presets() == []


class TestConfigValidator:
    """Test request validation"""

    def test_default_request_is_valid(self):
        assert ConfigValidator.validate(get_default_generation_config()) == (True, [])

    @pytest.mark.parametrize("count", [0, -1, 10001, "5", True])
    def test_count_bounds(self, count):
        config = get_default_generation_config()
        config.count = count

        assert _errors(config) == [ErrorKind.COUNT_EXCEEDED]

    def test_count_upper_bound_is_configurable(self):
        config = get_default_generation_config()
        config.count = 50

        errors = ConfigValidator.collect_errors(config, max_records=10)

        assert errors[0].context["max_allowed"] == 10

    def test_count_upper_bound_cannot_be_raised(self):
        config = get_default_generation_config()
        config.count = 10001

        errors = ConfigValidator.collect_errors(config, max_records=20000)

        assert [error.kind for error in errors] == [ErrorKind.COUNT_EXCEEDED]
        assert errors[0].context["max_allowed"] == 10000

    def test_no_fields(self):
        assert _errors(GenerationConfig(fields=[])) == [ErrorKind.NO_FIELDS_SELECTED]

    def test_demographics_must_total_100(self):
        config = get_default_generation_config()
        config.demographics.male_percentage = 60

        assert _errors(config) == [ErrorKind.INVALID_DEMOGRAPHICS]

    @pytest.mark.parametrize("male,female", [(None, 100), ("50", 50), (50, [50]), (True, 99)])
    def test_demographics_must_be_numbers(self, male, female):
        config = get_default_generation_config()
        config.demographics = DemographicsConfig(male_percentage=male, female_percentage=female)

        assert _errors(config) == [ErrorKind.INVALID_DEMOGRAPHICS]

    def test_fractional_percentages_are_accepted(self):
        config = get_default_generation_config()
        config.demographics = DemographicsConfig(male_percentage=33.5, female_percentage=66.5)

        assert _errors(config) == []

    @pytest.mark.parametrize("age_config", [
        AgeConfig.between(40, 40),
        AgeConfig.between(50, 20),
        AgeConfig(mode="under", max=None),
        AgeConfig(mode="exact", value=None),
        AgeConfig(mode="around"),
        AgeConfig.between("18", 65),
        AgeConfig.exact(30.5),
        AgeConfig.above(True),
    ])
    def test_invalid_age(self, age_config):
        config = get_default_generation_config()
        config.demographics.age_config = age_config

        assert _errors(config) == [ErrorKind.INVALID_AGE_RANGE]

    @pytest.mark.parametrize("location", [
        LocationConfig(mode="specific", countries=[]),
        LocationConfig(mode="single"),
        LocationConfig(mode="nearby"),
        LocationConfig(mode="specific", countries="US"),
        LocationConfig(mode="specific", countries=["US", None]),
        LocationConfig(mode="single", single_country=44),
    ])
    def test_invalid_location(self, location):
        config = get_default_generation_config()
        config.location = location

        assert _errors(config) == [ErrorKind.INVALID_LOCATION]

    @pytest.mark.parametrize("name", ["1st", "first name", "", "_id", "naïve", None, 7])
    def test_invalid_field_names(self, make_field, name):
        config = GenerationConfig(fields=[make_field(name, "uuid")])

        assert _errors(config) == [ErrorKind.INVALID_FIELD_NAME]

    def test_duplicate_field_names(self, make_field):
        config = GenerationConfig(fields=[make_field("a", "uuid"), make_field("a", "city")])

        assert _errors(config) == [ErrorKind.DUPLICATE_FIELD_NAME]

    @pytest.mark.parametrize("options", [
        {"length_min": 0},
        {"length_max": 1001},
        {"length_min": 8, "length_max": 4},
    ])
    def test_invalid_string_length(self, make_field, options):
        config = GenerationConfig(fields=[make_field("s", "randomString", **options)])

        assert _errors(config) == [ErrorKind.INVALID_STRING_LENGTH]

    def test_length_is_ignored_for_other_types(self, make_field):
        config = GenerationConfig(fields=[make_field("s", "uuid", length_min=0)])

        assert _errors(config) == []

    def test_invalid_number_range(self, make_field):
        config = GenerationConfig(fields=[make_field("n", "randomNumeric", number_min=5, number_max=5)])

        assert _errors(config) == [ErrorKind.INVALID_NUMBER_RANGE]

    def test_pattern_without_placeholders(self, make_field):
        config = GenerationConfig(fields=[make_field("p", "customPattern", pattern="ABC-123")])

        assert _errors(config) == [ErrorKind.INVALID_PATTERN]

    def test_zero_step(self, make_field):
        config = GenerationConfig(fields=[make_field("i", "autoIncrementCustom", step=0)])

        assert _errors(config) == [ErrorKind.INVALID_FIELD_CONFIG]

    def test_unknown_date_format(self, make_field):
        config = GenerationConfig(fields=[make_field("d", "dateOfBirth", date_format="jp")])

        assert _errors(config) == [ErrorKind.INVALID_FIELD_CONFIG]

    @pytest.mark.parametrize("field_type,options", [
        ("randomString", {"length_min": "5"}),
        ("randomAlphanumeric", {"length_max": 8.5}),
        ("randomNumeric", {"number_min": "1", "number_max": 9}),
        ("autoIncrementCustom", {"start": None, "step": "2"}),
        ("customPattern", {"pattern": 123}),
        ("boolean", {"boolean_true_percentage": "high"}),
        ("randomString", {"prefix": ["A"]}),
    ])
    def test_wrongly_typed_options(self, make_field, field_type, options):
        config = GenerationConfig(fields=[make_field("f", field_type, **options)])

        errors = ConfigValidator.collect_errors(config)

        assert [error.kind for error in errors] == [ErrorKind.INVALID_FIELD_CONFIG]
        assert errors[0].context["field_name"] == "f"

    def test_loaded_null_percentage_is_reported(self, loader):
        config = loader.load_from_dict({
            "fields": [{"name": "id", "type": "autoIncrement"}],
            "demographics": {"malePercentage": None, "femalePercentage": 100},
        })

        assert _errors(config) == [ErrorKind.INVALID_DEMOGRAPHICS]

    def test_loaded_string_length_is_reported(self, loader):
        config = loader.load_from_dict({
            "fields": [{"name": "s", "type": "randomString", "config": {"lengthMin": "3"}}],
        })

        assert _errors(config) == [ErrorKind.INVALID_FIELD_CONFIG]

    def test_non_mapping_demographics(self, loader):
        with pytest.raises(DummyForgeError) as excinfo:
            loader.load_from_dict({"fields": [], "demographics": [50, 50]})

        assert excinfo.value.kind == ErrorKind.INVALID_DEMOGRAPHICS

    def test_errors_are_reported_in_order(self, make_field):
        config = GenerationConfig(
            fields=[make_field("bad name", "uuid")],
            count=0,
            demographics=DemographicsConfig(male_percentage=10, female_percentage=10),
            location=LocationConfig(mode="single"),
        )

        assert _errors(config) == [
            ErrorKind.COUNT_EXCEEDED,
            ErrorKind.INVALID_DEMOGRAPHICS,
            ErrorKind.INVALID_FIELD_NAME,
            ErrorKind.INVALID_LOCATION,
        ]

    def test_check_raises_first_error(self):
        config = GenerationConfig(fields=[], count=0)

        with pytest.raises(DummyForgeError) as excinfo:
            ConfigValidator.check(config)

        assert excinfo.value.kind == ErrorKind.COUNT_EXCEEDED

    def test_validate_returns_messages(self):
        is_valid, errors = ConfigValidator.validate(GenerationConfig(fields=[]))

        assert not is_valid
        assert errors == ["No fields selected for generation"]


class TestSettings:
    """Test application settings"""

    def test_defaults(self, loader):
        settings = loader.load_settings()

        assert settings.engine.max_records == 10000
        assert settings.export.formats == ["csv"]
        assert settings.logging.level == "INFO"

    def test_partial_dict(self, loader):
        settings = loader.load_settings({"engine": {"seed": 7}, "export": {"tableName": "People"}})

        assert settings.engine.seed == 7
        assert settings.engine.locale == "en_US"
        assert settings.export.table_name == "People"

    def test_from_file(self, loader, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("export:\n  formats: [sql, pdf]\nlogging:\n  level: DEBUG\n")

        settings = loader.load_settings(path)

        assert settings.export.formats == ["sql", "pdf"]
        assert settings.logging.level == "DEBUG"

    def test_merge_prefers_other_values(self):
        base = Settings(engine=EngineSettings(seed=1, locale="de_DE"))
        other = Settings(engine=EngineSettings(seed=None, locale="fr_FR"))

        merged = base.merge(other)

        assert merged.engine.seed == 1
        assert merged.engine.locale == "fr_FR"
        assert base.engine.locale == "de_DE"

    def test_to_dict(self):
        assert Settings().to_dict()["export"]["table_name"] == "GeneratedData"
