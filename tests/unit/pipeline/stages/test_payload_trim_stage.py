"""
Unit tests for PayloadTrimStage

The stage is exercised against real capture files written with scapy.
"""

from decimal import Decimal

import pytest
from scapy.compat import raw
from scapy.layers.inet import IP
from scapy.packet import Raw
from scapy.utils import PcapReader, PcapWriter, rdpcap, wrpcapng

from pkttrim.common.exceptions import (
    ConfigurationError,
    ProcessingError,
    UnencodableLayerError,
    UnsupportedLinkTypeError,
)
from pkttrim.core.pipeline.models import StageStats
from pkttrim.core.pipeline.stages.trim_payload import PayloadTrimStage


class TestPayloadTrimStageConfig:
    """Configuration and initialization"""

    def test_initialization_with_defaults(self):
        stage = PayloadTrimStage({})

        assert stage.enabled is True
        assert stage.error_policy_name == "abort"
        assert stage.rejects_path is None
        assert stage.dry_run is False
        assert stage.name == "PayloadTrimStage"

    def test_initialize_success(self):
        stage = PayloadTrimStage({"error_policy": "skip"})

        assert stage.initialize() is True
        assert stage.is_initialized

    def test_initialize_rejects_invalid_policy(self):
        stage = PayloadTrimStage({"error_policy": "ignore"})

        assert stage.initialize() is False
        assert not stage.is_initialized

    def test_rejects_path_requires_skip_policy(self, temp_dir):
        stage = PayloadTrimStage({"error_policy": "abort", "rejects_path": str(temp_dir / "rejects.pcap")})

        assert stage.initialize() is False

    def test_process_file_with_invalid_config_raises(self, write_capture, temp_dir, tcp_packet):
        stage = PayloadTrimStage({"error_policy": "ignore"})
        input_path = write_capture([tcp_packet])

        with pytest.raises(ConfigurationError):
            stage.process_file(input_path, temp_dir / "out.pcap")

    def test_cleanup_resets_state(self):
        stage = PayloadTrimStage({})
        stage.initialize()

        stage.cleanup()

        assert not stage.is_initialized

    def test_display_name(self):
        stage = PayloadTrimStage({})

        assert stage.get_display_name() == "Trim Payloads"
        assert "transport" in stage.get_description()


class TestPayloadTrimStageProcessing:
    """End-to-end file processing"""

    def test_ethernet_capture(self, write_capture, temp_dir, tcp_packet, udp_packet):
        input_path = write_capture([tcp_packet, udp_packet])
        output_path = temp_dir / "out.pcap"

        stats = PayloadTrimStage({}).process_file(input_path, output_path)

        assert isinstance(stats, StageStats)
        assert stats.packets_processed == 2
        assert stats.packets_modified == 2
        assert stats.bytes_removed == 1460 + 64
        assert stats.extra_metrics["packets_written"] == 2

        packets = rdpcap(str(output_path))
        assert len(packets) == 2
        assert len(raw(packets[0])) == 54
        assert packets[0].wirelen == 1514
        assert abs(float(packets[0].time) - 1700000000.123456) < 1e-6
        assert packets[0][IP].len == 1500
        assert len(raw(packets[1])) == 42
        assert packets[1].wirelen == 106

    def test_linux_cooked_capture(self, write_capture, temp_dir, sll_packet):
        input_path = write_capture([sll_packet], name="cooked.pcap")
        output_path = temp_dir / "cooked_out.pcap"

        PayloadTrimStage({}).process_file(input_path, output_path)

        with PcapReader(str(output_path)) as reader:
            assert reader.linktype == 113
            packets = list(reader)
        assert len(raw(packets[0])) == 56
        assert raw(packets[0])[:16] == raw(sll_packet)[:16]
        assert packets[0].wirelen == len(raw(sll_packet))

    def test_nanosecond_timestamps_pass_through(self, temp_dir, tcp_packet):
        input_path = temp_dir / "nano.pcap"
        tcp_packet.time = Decimal("1700000000.123456789")
        with PcapWriter(str(input_path), nano=True) as writer:
            writer.write(tcp_packet)
        output_path = temp_dir / "out.pcap"

        PayloadTrimStage({}).process_file(input_path, output_path)

        with PcapReader(str(input_path)) as reader:
            original = list(reader)
        with PcapReader(str(output_path)) as reader:
            assert reader.nano
            trimmed = list(reader)
        assert trimmed[0].time == original[0].time
        assert len(raw(trimmed[0])) == 54

    def test_pcapng_input(self, temp_dir, tcp_packet):
        input_path = temp_dir / "input.pcapng"
        wrpcapng(str(input_path), [tcp_packet])
        output_path = temp_dir / "out.pcap"

        stats = PayloadTrimStage({}).process_file(input_path, output_path)

        packets = rdpcap(str(output_path))
        assert stats.packets_modified == 1
        assert len(raw(packets[0])) == 54

    def test_unsupported_linktype_fails_before_output(self, write_capture, temp_dir):
        input_path = write_capture([Raw(b"\x01\x02\x03\x04")], name="user0.pcap", linktype=147)
        output_path = temp_dir / "out.pcap"

        with pytest.raises(UnsupportedLinkTypeError) as exc_info:
            PayloadTrimStage({}).process_file(input_path, output_path)

        assert exc_info.value.linktype == 147
        assert not output_path.exists()

    def test_abort_policy_raises_processing_error(self, write_capture, temp_dir, tcp_packet, esp_packet):
        input_path = write_capture([tcp_packet, esp_packet])

        with pytest.raises(ProcessingError) as exc_info:
            PayloadTrimStage({}).process_file(input_path, temp_dir / "out.pcap")

        assert isinstance(exc_info.value.__cause__, UnencodableLayerError)
        assert exc_info.value.step_name == "PayloadTrimStage"

    def test_skip_policy_writes_rejects(self, write_capture, temp_dir, tcp_packet, esp_packet, udp_packet):
        input_path = write_capture([tcp_packet, esp_packet, udp_packet])
        output_path = temp_dir / "out.pcap"
        rejects_path = temp_dir / "rejects.pcap"
        stage = PayloadTrimStage({"error_policy": "skip", "rejects_path": str(rejects_path)})

        stats = stage.process_file(input_path, output_path)

        assert stats.packets_processed == 3
        assert stats.packets_skipped == 1
        assert stats.extra_metrics["skipped_by_error"] == {"UnencodableLayerError": 1}
        assert len(rdpcap(str(output_path))) == 2
        rejected = rdpcap(str(rejects_path))
        assert len(rejected) == 1
        assert raw(rejected[0]) == raw(esp_packet)

    def test_dry_run_writes_nothing(self, write_capture, temp_dir, tcp_packet):
        input_path = write_capture([tcp_packet])
        output_path = temp_dir / "out.pcap"

        stats = PayloadTrimStage({"dry_run": True}).process_file(input_path, output_path)

        assert stats.packets_processed == 1
        assert stats.extra_metrics["dry_run"] is True
        assert not output_path.exists()
