"""Pydantic models for Synology DSM Web API responses.

This module contains type-safe models for the response payloads of the
endpoints the client queries. Models mirror the vendor JSON one to one:
attributes are snake_case, the original JSON key is kept as the alias, and
every field has a zero-valued default so partial payloads still decode.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class SynologyModel(BaseModel):
    """Base model for DSM payloads.

    Unknown keys are ignored and ``null`` values fall back to the field
    default, so decoding never depends on the exact DSM release. Values are
    not coerced: a number sent as a string, or 1 for a boolean, is rejected.
    """

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        extra = "ignore"
        protected_namespaces = ()
        strict = True

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# Envelope


class ErrorDetail(SynologyModel):
    """Error block of a failed response."""

    code: int = Field(100, description="DSM error code")
    errors: Any = Field(None, description="Per-field error details, if any")


class Envelope(SynologyModel):
    """Response wrapper shared by every DSM endpoint."""

    success: bool = Field(False, description="Whether the call succeeded")
    data: Any = Field(None, description="Endpoint payload")
    error: Optional[ErrorDetail] = Field(None, description="Error block on failure")


class Connection(BaseModel):
    """Authenticated session with a single device.

    Created by login and passed explicitly to every query.
    """

    origin: str = Field(..., description="Scheme, host and port, e.g. http://nas.local:5000")
    token: str = Field(..., description="Session identifier (sid)")

    class Config:
        """Pydantic configuration."""
        frozen = True


class EmptyResult(SynologyModel):
    """Payload of calls that return nothing of interest, such as logout."""


class AuthResult(SynologyModel):
    """Payload of a SYNO.API.Auth login."""

    sid: str = Field("", description="Session identifier")
    is_portal_port: bool = Field(False, description="Login went through a portal port")


# SYNO.Core.System.Utilization


class CpuLoad(SynologyModel):
    """CPU load averages and current split."""

    load_15min: int = Field(0, alias="15min_load")
    load_1min: int = Field(0, alias="1min_load")
    load_5min: int = Field(0, alias="5min_load")
    device: str = ""
    other_load: int = 0
    system_load: int = 0
    user_load: int = 0


class IOTotal(SynologyModel):
    """Aggregated I/O counters."""

    device: str = ""
    read_access: int = 0
    read_byte: int = 0
    utilization: int = 0
    write_access: int = 0
    write_byte: int = 0


class DiskIO(IOTotal):
    """I/O counters of one physical disk."""

    display_name: str = ""
    type: str = ""


class DiskUtilization(SynologyModel):
    disks: List[DiskIO] = Field(default_factory=list, alias="disk")
    total: IOTotal = Field(default_factory=IOTotal)


class LunIO(SynologyModel):
    """I/O counters of one iSCSI LUN."""

    device: str = ""
    path: str = ""
    queue_exe: int = 0
    queue_que: int = 0
    queue_wbk: int = 0
    read_avg_cmd_size: int = 0
    read_avg_latency: int = 0
    read_bytes: int = 0
    read_cmd_count: int = 0
    rx_avg_latency: int = 0
    total_cmd_count: int = 0
    total_io_latency: int = 0
    total_iops: int = 0
    total_throughput: int = 0
    tx_avg_latency: int = 0
    type: str = ""
    uuid: str = ""
    write_avg_cmd_size: int = 0
    write_avg_latency: int = 0
    write_bytes: int = 0
    write_cmd_count: int = 0


class MemoryUtilization(SynologyModel):
    """Memory and swap usage, sizes in KB as reported by DSM."""

    avail_real: int = 0
    avail_swap: int = 0
    buffer: int = 0
    cached: int = 0
    device: str = ""
    memory_size: int = 0
    real_usage: int = 0
    si_disk: int = 0
    so_disk: int = 0
    swap_usage: int = 0
    total_real: int = 0
    total_swap: int = 0


class NetworkIO(SynologyModel):
    """Throughput of one network interface in bytes per second."""

    device: str = ""
    rx: int = 0
    tx: int = 0


class VolumeIO(IOTotal):
    display_name: str = ""


class SpaceUtilization(SynologyModel):
    total: IOTotal = Field(default_factory=IOTotal)
    volumes: List[VolumeIO] = Field(default_factory=list, alias="volume")


class SystemUtilization(SynologyModel):
    """Point-in-time utilization snapshot of the device.

    Returned by SYNO.Core.System.Utilization ``get``.
    """

    cpu: CpuLoad = Field(default_factory=CpuLoad, description="CPU load")
    disk: DiskUtilization = Field(default_factory=DiskUtilization, description="Disk I/O")
    lun: List[LunIO] = Field(default_factory=list, description="LUN I/O")
    memory: MemoryUtilization = Field(default_factory=MemoryUtilization, description="Memory usage")
    network: List[NetworkIO] = Field(default_factory=list, description="Network throughput")
    space: SpaceUtilization = Field(default_factory=SpaceUtilization, description="Volume I/O")
    time: int = Field(0, description="Capture time (Unix epoch seconds)")


# SYNO.Core.Share


class SharedFolder(SynologyModel):
    """One configured shared folder."""

    desc: str = Field("", description="Share description")
    is_usb_share: bool = Field(False, description="Share lives on a USB device")
    name: str = Field("", description="Share name")
    quota_value: float = Field(0.0, description="Quota in MB (0 = unlimited)")
    share_quota_used: float = Field(0.0, description="Quota used in MB")
    uuid: str = Field("", description="Share UUID")
    vol_path: str = Field("", description="Hosting volume path")


class SharedFolderSet(SynologyModel):
    """Result of SYNO.Core.Share ``list``."""

    shares: List[SharedFolder] = Field(default_factory=list, description="Shared folders")
    total: int = Field(0, description="Number of shared folders")


# SYNO.Storage.CGI.Storage


class DiskContainer(SynologyModel):
    """Enclosure that holds a disk."""

    order: int = 0
    label: str = Field("", alias="str")
    support_pwr_btn_disable: bool = Field(False, alias="supportPwrBtnDisable")
    type: str = ""


class Disk(SynologyModel):
    """Physical disk with health and SMART state."""

    adv_progress: str = ""
    adv_status: str = ""
    below_remain_life_thr: bool = False
    container: DiskContainer = Field(default_factory=DiskContainer)
    device: str = Field("", description="Device node, e.g. /dev/sata1")
    disable_secera: bool = False
    disk_type: str = Field("", alias="diskType")
    disk_code: str = ""
    erase_time: int = 0
    exceed_bad_sector_thr: bool = False
    firm: str = Field("", description="Firmware revision")
    has_system: bool = False
    id: str = Field("", description="Disk identifier referenced by volumes")
    is_4kn: bool = Field(False, alias="is4Kn")
    is_ssd: bool = Field(False, alias="isSsd")
    is_syno_partition: bool = Field(False, alias="isSynoPartition")
    is_erasing: bool = False
    long_name: str = Field("", alias="longName")
    model: str = ""
    name: str = ""
    num_id: int = 0
    order: int = 0
    overview_status: str = Field("", description="Overall health (normal, warning, ...)")
    pci_slot: int = Field(0, alias="pciSlot")
    port_type: str = Field("", alias="portType")
    remain_life: int = 0
    serial: str = ""
    size_total: str = Field("", description="Capacity in bytes, as a string")
    smart_progress: str = ""
    smart_status: str = Field("", description="SMART test status")
    smart_test_limit: int = 0
    status: str = ""
    support: bool = False
    temp: int = Field(0, description="Temperature in Celsius")
    tray_status: str = ""
    unc: int = 0
    used_by: str = Field("", description="ID of the volume or pool using the disk")
    vendor: str = ""


class BatchTask(SynologyModel):
    max_task: int = 0
    remain_task: int = 0


class IsnsSettings(SynologyModel):
    address: str = ""
    enabled: bool = False


class EnvStatus(SynologyModel):
    system_crashed: bool = False
    system_need_repair: bool = False


class EnvSupport(SynologyModel):
    ebox: bool = False
    raid_cross: bool = False
    sysdef: bool = False


class StorageEnvironment(SynologyModel):
    """Device-level storage environment and support flags."""

    batchtask: BatchTask = Field(default_factory=BatchTask)
    bay_number: str = ""
    ebox: List[Any] = Field(default_factory=list)
    fs_acting: bool = False
    is_sync_sys_partition: bool = Field(False, alias="isSyncSysPartition")
    is_space_actioning: bool = False
    isns: IsnsSettings = Field(default_factory=IsnsSettings)
    isns_server: str = ""
    max_fs_bytes: str = ""
    max_fs_bytes_high_end: str = ""
    model_name: str = ""
    ram_enough_for_fs_high_end: bool = False
    ram_size: int = 0
    ram_size_required: int = 0
    showpooltab: bool = False
    status: EnvStatus = Field(default_factory=EnvStatus)
    support: EnvSupport = Field(default_factory=EnvSupport)
    support_fit_fs_limit: bool = False
    unique_key: str = ""


class HotSpareConfig(SynologyModel):
    cross_repair: bool = False
    disable_repair: List[Any] = Field(default_factory=list)


class MigrateCapability(SynologyModel):
    to_shr2: int = 0


class SpaceCapabilities(SynologyModel):
    """Actions DSM currently allows on a volume or LUN."""

    convert_shr_to_pool: int = 0
    delete: bool = False
    expand_by_disk: int = 0
    migrate: MigrateCapability = Field(default_factory=MigrateCapability)
    raid_cross: bool = False


class Progress(SynologyModel):
    percent: str = ""
    step: str = ""


class ScheduledTaskGeneral(SynologyModel):
    lid: int = 0
    snap_rotate: bool = False
    snap_type: str = ""
    task_enabled: bool = False
    task_name: str = ""
    tid: int = 0


class ScheduledTaskSchedule(SynologyModel):
    date: str = ""
    date_type: int = 0
    hour: int = 0
    last_work_hour: int = 0
    min: int = 0
    next_trigger_time: str = ""
    repeat: int = 0
    repeat_hour: int = 0
    repeat_hour_store_config: Any = None
    repeat_min: int = 0
    repeat_min_store_config: Any = None
    week_name: str = ""


class ScheduledTask(SynologyModel):
    """Scheduled snapshot task attached to a LUN."""

    general: ScheduledTaskGeneral = Field(default_factory=ScheduledTaskGeneral)
    schedule: ScheduledTaskSchedule = Field(default_factory=ScheduledTaskSchedule)


class IscsiLunDetail(SynologyModel):
    """iSCSI-level properties of a LUN."""

    blk_num: str = Field("", alias="blkNum")
    device_type: str = ""
    extent_based: bool = False
    extent_size: str = ""
    lid: int = 0
    location: str = ""
    mapped_targets: List[int] = Field(default_factory=list, description="Target IDs (tid)")
    name: str = ""
    parent: Dict[str, Any] = Field(default_factory=dict)
    restored_time: str = ""
    rootpath: str = ""
    scheduled_task: List[ScheduledTask] = Field(default_factory=list)
    size: str = ""
    snapshots: List[Any] = Field(default_factory=list)
    thin_provision: bool = False
    used_by: str = ""
    uuid: str = ""


class IscsiLun(SynologyModel):
    """LUN entry of the storage inventory."""

    can_do: SpaceCapabilities = Field(default_factory=SpaceCapabilities)
    id: str = ""
    is_actioning: bool = False
    iscsi_lun: IscsiLunDetail = Field(default_factory=IscsiLunDetail)
    num_id: int = 0
    progress: Progress = Field(default_factory=Progress)
    status: str = ""


class TargetAuth(SynologyModel):
    mutual_username: str = ""
    type: str = ""
    username: str = ""


class TargetMasking(SynologyModel):
    iqn: str = Field("", description="Initiator IQN")
    permission: str = ""


class IscsiTarget(SynologyModel):
    """iSCSI target with its initiator masking."""

    auth: TargetAuth = Field(default_factory=TargetAuth)
    data_chksum: bool = False
    enabled: bool = False
    hdr_chksum: bool = False
    iqn: str = ""
    mapped_logical_unit_number: List[Any] = Field(default_factory=list)
    mapped_luns: List[Any] = Field(default_factory=list)
    masking: List[TargetMasking] = Field(default_factory=list)
    multi_sessions: bool = False
    name: str = ""
    num_id: int = 0
    recv_seg_bytes: int = 0
    remote: List[Any] = Field(default_factory=list)
    send_seg_bytes: int = 0
    status: str = ""
    tid: int = 0


class RaidDevice(SynologyModel):
    id: str = Field("", description="Disk ID")
    slot: int = 0
    status: str = ""


class Raid(SynologyModel):
    """RAID group backing a volume."""

    designed_disk_count: int = Field(0, alias="designedDiskCount")
    devices: List[RaidDevice] = Field(default_factory=list)
    min_dev_size: str = Field("", alias="minDevSize")
    normal_dev_count: int = Field(0, alias="normalDevCount")
    raid_path: str = Field("", alias="raidPath")
    raid_status: int = Field(0, alias="raidStatus")
    spares: List[Any] = Field(default_factory=list)


class VolumeSize(SynologyModel):
    """Capacity figures, in bytes or inodes, as strings."""

    free_inode: str = ""
    total: str = ""
    total_device: str = ""
    total_inode: str = ""
    used: str = ""


class SsdTrim(SynologyModel):
    support: str = ""


class CapabilityCheck(SynologyModel):
    can_do: bool = False
    err_code: int = Field(0, alias="errCode")
    stop_service: bool = Field(False, alias="stopService")


class ResizeCapability(SynologyModel):
    resize: CapabilityCheck = Field(default_factory=CapabilityCheck)


class FlashcacheCapabilities(SynologyModel):
    apply: CapabilityCheck = Field(default_factory=CapabilityCheck)
    remove: CapabilityCheck = Field(default_factory=CapabilityCheck)
    resize: CapabilityCheck = Field(default_factory=CapabilityCheck)


class VspaceCapabilities(SynologyModel):
    drbd: ResizeCapability = Field(default_factory=ResizeCapability)
    flashcache: FlashcacheCapabilities = Field(default_factory=FlashcacheCapabilities)
    snapshot: ResizeCapability = Field(default_factory=ResizeCapability)


class Volume(SynologyModel):
    """Filesystem-bearing volume and the RAID groups beneath it."""

    atime_checked: bool = False
    atime_opt: str = ""
    cache_status: str = Field("", alias="cacheStatus")
    can_do: SpaceCapabilities = Field(default_factory=SpaceCapabilities)
    container: str = ""
    deploy_path: str = ""
    desc: str = ""
    device_type: str = Field("", description="RAID type, e.g. shr_without_disk_protect")
    disk_failure_number: int = 0
    disks: List[str] = Field(default_factory=list, description="Member disk IDs")
    drive_type: int = 0
    eppool_used: str = ""
    exist_alive_vdsm: bool = False
    fs_type: str = Field("", description="Filesystem, e.g. btrfs or ext4")
    id: str = ""
    is_acting: bool = False
    is_actioning: bool = False
    is_inode_full: bool = False
    is_writable: bool = False
    limited_disk_number: int = 0
    max_fs_size: str = ""
    maximal_disk_size: str = ""
    minimal_disk_size: str = ""
    num_id: int = 0
    pool_path: str = ""
    progress: Progress = Field(default_factory=Progress)
    raids: List[Raid] = Field(default_factory=list)
    size: VolumeSize = Field(default_factory=VolumeSize)
    space_path: str = ""
    spares: List[Any] = Field(default_factory=list)
    ssd_trim: SsdTrim = Field(default_factory=SsdTrim)
    status: str = ""
    suggestions: List[Any] = Field(default_factory=list)
    timebackup: bool = False
    used_by_gluster: bool = False
    vol_path: str = Field("", description="Mount path, e.g. /volume1")
    vspace_can_do: VspaceCapabilities = Field(default_factory=VspaceCapabilities)


class StorageInventory(SynologyModel):
    """Result of SYNO.Storage.CGI.Storage ``load_info``.

    Relations (volume to disks, LUN to targets) are plain ID strings and
    numbers; callers match them up themselves.
    """

    disks: List[Disk] = Field(default_factory=list, description="Physical disks")
    env: StorageEnvironment = Field(default_factory=StorageEnvironment, description="Environment")
    hot_spare_conf: HotSpareConfig = Field(default_factory=HotSpareConfig, alias="hotSpareConf")
    hot_spares: List[Any] = Field(default_factory=list, alias="hotSpares")
    iscsi_luns: List[IscsiLun] = Field(default_factory=list, alias="iscsiLuns")
    iscsi_targets: List[IscsiTarget] = Field(default_factory=list, alias="iscsiTargets")
    ports: List[Any] = Field(default_factory=list)
    ssd_caches: List[Any] = Field(default_factory=list, alias="ssdCaches")
    storage_pools: List[Any] = Field(default_factory=list, alias="storagePools")
    volumes: List[Volume] = Field(default_factory=list, description="Volumes")
