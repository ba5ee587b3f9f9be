"""Tests for the built-in scenes and the command line entry point.

Tests cover:
- Every scene builder returns a usable (world, lights, camera)
- Scene layout is independent of the render streams
- End-to-end CLI render to stdout
- Exit codes for bad arguments and broken output
- CUDA backend selection falling back to the CPU renderer
"""

import logging

import pytest

from camera.camera import Camera
from core.vector import Color, Point3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.isotropic import Isotropic
import main as cli
from main import main, parse_args, select_backend
from scenes import SCENES, bouncing_spheres


class BrokenStdout:
    def write(self, text):
        raise BrokenPipeError(32, "Broken pipe")

    def flush(self):
        pass


class TestScenes:
    """Tests for the scene builders."""

    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_builder_shape(self, name):
        world, lights, camera = SCENES[name]()
        assert isinstance(world, HittableList)
        assert len(world) > 0
        assert lights is None or len(lights) > 0
        assert isinstance(camera, Camera)
        assert camera.image_height >= 1

    def test_bouncing_spheres_layout_is_fixed(self):
        first, _, _ = bouncing_spheres()
        second, _, _ = bouncing_spheres()
        centers = [obj.center.origin.x for obj in first]
        assert centers == [obj.center.origin.x for obj in second]

    def test_bouncing_spheres_seed_changes_layout(self):
        a, _, _ = bouncing_spheres(1)
        b, _, _ = bouncing_spheres(2)
        assert [o.center.origin.x for o in a] != [o.center.origin.x for o in b]


class TestCli:
    """Tests for main."""

    def test_defaults(self):
        args = parse_args([])
        assert args.scene == "cornell_box"
        assert args.backend == "cpu"
        assert args.width is None

    def test_render_to_stdout(self, capsys):
        code = main(["single_sphere", "--width", "4", "--spp", "1", "--max-depth", "2",
                     "--workers", "1", "--seed", "3"])
        assert code == 0
        out = capsys.readouterr().out
        assert out.startswith("P3\n4 4\n255\n")
        assert len(out.splitlines()) == 3 + 16

    def test_same_seed_same_output(self, capsys):
        argv = ["single_sphere", "--width", "4", "--spp", "4", "--max-depth", "3",
                "--workers", "1", "--seed", "17"]
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        assert capsys.readouterr().out == first

    def test_bad_width(self, capsys):
        assert main(["single_sphere", "--width", "0"]) == 2

    def test_bad_workers(self, capsys):
        assert main(["single_sphere", "--width", "4", "--workers", "0"]) == 2

    def test_unknown_scene(self):
        with pytest.raises(SystemExit):
            main(["no_such_scene"])

    def test_broken_stdout(self, monkeypatch):
        monkeypatch.setattr("sys.stdout", BrokenStdout())
        code = main(["single_sphere", "--width", "2", "--spp", "1", "--max-depth", "1",
                     "--workers", "1", "--seed", "0"])
        assert code == 1

    def test_cuda_request_falls_back(self, capsys):
        code = main(["single_sphere", "--width", "2", "--spp", "1", "--max-depth", "1",
                     "--workers", "1", "--seed", "0", "--backend", "cuda"])
        assert code == 0
        assert capsys.readouterr().out.startswith("P3\n2 2\n255\n")


class TestBackendSelection:
    """select_backend when a CUDA device is present."""

    @pytest.fixture
    def fake_device(self, monkeypatch):
        monkeypatch.setattr(cli, "probe_cuda", lambda: "Fake GPU")

    def test_unpackable_scene_falls_back(self, fake_device, caplog):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Isotropic(Color(1, 1, 1)))])
        with caplog.at_level(logging.WARNING, logger="main"):
            assert select_backend("cuda", world, Camera(), 0) == "cpu"
        assert "cannot run" in caplog.text

    def test_packed_scene_still_renders_on_cpu(self, fake_device, caplog):
        world, _, camera = SCENES["single_sphere"]()
        with caplog.at_level(logging.WARNING, logger="main"):
            assert select_backend("cuda", world, camera, 3) == "cpu"
        assert "Fake GPU" in caplog.text
        assert "1 spheres" in caplog.text

    def test_main_with_unpackable_scene(self, fake_device, monkeypatch, capsys):
        def foggy():
            world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Isotropic(Color(1, 1, 1)))])
            return world, None, Camera(background=None)

        monkeypatch.setitem(SCENES, "single_sphere", foggy)
        code = main(["single_sphere", "--width", "2", "--spp", "1", "--max-depth", "2",
                     "--workers", "1", "--seed", "0", "--backend", "cuda"])
        assert code == 0
        assert capsys.readouterr().out.startswith("P3\n2 2\n255\n")
