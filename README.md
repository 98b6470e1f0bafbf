# ferrite

Core building blocks for a voxel engine that renders by ray marching on the
GPU, written in plain Python with NumPy. The package computes the data and
decisions a renderer needs each frame: coordinates, camera matrices, terrain
voxels, push-constant bytes, image layout barriers, TAA history bookkeeping,
GPU selection and swapchain settings.

## Modules

- `ferrite.coords` – `WorldPos`, `ChunkPos` and `LocalPos` with conversion
  between absolute voxel positions and 32³ chunks (`to_chunk_and_local`,
  `world_origin`, `to_index`, `from_index`). Constants `CHUNK_SIZE`,
  `CHUNK_VOLUME` and `VOXEL_SIZE_CM`. `LocalPos` raises `ValueError` for
  components outside `[0, 32)`.
- `ferrite.direction` – the six cube faces as the `Face` enum, with
  `normal()`, `opposite()` and `step(x, y, z)`, which returns `None` when the
  step would leave the chunk.
- `ferrite.morton` – 15-bit Z-order `encode(x, y, z)` / `decode(code)` for
  32³ grids.
- `ferrite.voxel` – `Voxel` palette indices (`Voxel.AIR` is index 0, with
  `is_air()` / `is_solid()`) and `Material`, whose `Material.color(r, g, b)`
  gives roughness 200, no metalness and no emission.
- `ferrite.camera` – `Transform` (`from_translation`, `looking_at`,
  `to_matrix`), the first-person `FlyCamera` with `update(...)` driven by
  `Key` presses and mouse deltas, `CursorState`, `perspective_rh`,
  `quat_from_euler_yxz`, `CameraUniform` and `spawn_fly_camera()`.
- `ferrite.ray_march` – `generate_terrain` (a 512×192×512 rolling
  height-map by default, as a flat `uint32` array), `default_palette`,
  `palette_bytes`, `dispatch_groups` for 8×8 workgroups and
  `RayMarchPushConstants.to_bytes()`.
- `ferrite.layouts` – `ImageLayout`, `AccessFlags`, `PipelineStage`,
  `ImageBarrier`, `access_and_stage_for_layout` and `transition_barrier`.
- `ferrite.taa` – `TaaResolvePushConstants`, `history_indices`,
  `descriptor_bindings` and `resolve_transitions` for the ping-pong history
  images.
- `ferrite.frame` – `halton`, `taa_jitter` (8-sample Halton(2, 3) cycle),
  `build_push_constants`, `reprojection_matrix`, `TaaState` (`toggle`,
  `uses_resolve`, `advance`) and `DebugStats.update`, which returns a window
  title string every quarter second.
- `ferrite.device` – `DeviceInfo`, `QueueFamily`, `DeviceType`,
  `make_api_version`, `evaluate_device`, `select_device` (raises
  `NoSuitableDeviceError`) and `unique_queue_families`.
- `ferrite.swapchain` – `Extent2D`, `SurfaceFormat`, `SurfaceCapabilities`,
  `SwapchainConfig`, `choose_surface_format`, `choose_extent`,
  `choose_image_count` and `configure_swapchain`.

## Install

```
pip install .
```

## Example

```python
from ferrite import morton
from ferrite.coords import WorldPos
from ferrite.frame import TaaState, build_push_constants, reprojection_matrix, taa_jitter
from ferrite.camera import spawn_fly_camera

chunk, local = WorldPos(-1, -32, -33).to_chunk_and_local()
print(chunk)   # ChunkPos(x=-1, y=-1, z=-2)
print(local)   # LocalPos(x=31, y=0, z=31)

code = morton.encode(1, 2, 3)
assert morton.decode(code) == (1, 2, 3)

camera, transform = spawn_fly_camera()
state = TaaState()
constants, view_proj = build_push_constants(transform, 16 / 9, taa_jitter(state.frame_number))
reproj = reprojection_matrix(state.prev_view_proj, constants.inv_view_proj)
payload = constants.to_bytes()   # bytes ready to push to the shader
state.advance(view_proj)
```

## What it does not do

The package opens no window, reads no keyboard or mouse on its own, and talks
to no GPU: it does not create devices, swapchains, buffers or pipelines, and
it does not record or submit command buffers or present frames. Input is
passed in as values (`Key` sets, mouse deltas, button flags), and the results
are plain Python and NumPy values for a renderer to use. There is no command
to run.

## Tests

```
pip install .[test]
pytest
```