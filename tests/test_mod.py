import pytest

from transportgen.mod import GoMod, parse_go_mod

GO_MOD = """module github.com/acme/service

go 1.15

require (
	github.com/pkg/errors v0.9.1
	github.com/fatih/structtag v1.2.0 // indirect
	gopkg.in/yaml.v2 v2.3.0
)

require github.com/google/go-cmp v0.3.1
"""


def test_parse_module_and_requirements():
    module, require = parse_go_mod(GO_MOD, "/gopath")
    assert module == "github.com/acme/service"
    assert require["github.com/pkg/errors"] == "/gopath/pkg/mod/github.com/pkg/errors@v0.9.1"
    assert require["github.com/fatih/structtag"] == (
        "/gopath/pkg/mod/github.com/fatih/structtag@v1.2.0"
    )
    assert set(require) == {
        "github.com/pkg/errors",
        "github.com/fatih/structtag",
        "gopkg.in/yaml.v2",
        "github.com/google/go-cmp",
    }


def test_parse_without_module_fails():
    with pytest.raises(ValueError):
        parse_go_mod("go 1.15\n", "/gopath")


@pytest.fixture
def mod(tmp_path):
    path = tmp_path / "go.mod"
    path.write_text(GO_MOD)
    return GoMod(go_mod_path=str(path), go_path="/gopath")


def test_local_package_is_relative(mod):
    assert mod.pkg_mod_path("github.com/acme/service/pkg/api") == "./pkg/api"


def test_required_subpackage(mod):
    assert mod.pkg_mod_path("github.com/google/go-cmp/cmp/cmpopts") == (
        "/gopath/pkg/mod/github.com/google/go-cmp@v0.3.1/cmp/cmpopts"
    )


def test_required_module_root(mod):
    assert mod.pkg_mod_path("gopkg.in/yaml.v2") == "/gopath/pkg/mod/gopkg.in/yaml.v2@v2.3.0"


def test_unknown_package(mod):
    assert mod.pkg_mod_path("example.com/other/pkg") == ""


def test_missing_go_mod_treats_everything_as_local(tmp_path):
    mod = GoMod(go_mod_path=str(tmp_path / "absent.mod"), go_path="/gopath")
    assert mod.pkg_mod_path("example.com/other/pkg") == ".example.com/other/pkg"