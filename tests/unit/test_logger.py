"""Unit tests for the run log."""

from hostdeploy.logger import DeployLogger


class TestDeployLogger:
    def test_log_file_layout_and_status(self, tmp_path):
        logger = DeployLogger("prod", "push", tmp_path)
        logger.step("Building server system")
        logger.log_output("\x1b[32mbuilt\x1b[0m", "stdout")
        logger.close()

        assert logger.log_path.parent.parent == tmp_path / "prod"
        assert logger.log_path.name.endswith("_push.log")
        content = logger.log_path.read_text()
        assert "Operation: push" in content
        assert "Step: Building server system" in content
        assert "  [stdout] built" in content
        assert "Status: SUCCESS" in content

    def test_errors_mark_the_run_failed(self, tmp_path):
        logger = DeployLogger("prod", "init", tmp_path)
        logger.log_error("ssh failed with exit code 255", context="Connection refused")
        logger.close()

        content = logger.log_path.read_text()
        assert "Context: Connection refused" in content
        assert "Status: FAILED" in content
