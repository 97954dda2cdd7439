from actorhost.codec import DEFAULT_SERIALIZER_TYPE
from actorhost.config import ActorConfig, get_config_from_options, with_serializer_name


def test_default_config_without_options():
    config = get_config_from_options()
    assert config.serializer_type == DEFAULT_SERIALIZER_TYPE


def test_config_with_option():
    config = get_config_from_options(with_serializer_name("mockSerializerType"))
    assert config.serializer_type == "mockSerializerType"


def test_last_option_wins():
    config = get_config_from_options(with_serializer_name("yaml"), with_serializer_name("mockSerializerType"))
    assert config == ActorConfig(serializer_type="mockSerializerType")